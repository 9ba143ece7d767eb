import asyncio
import logging
import sys
from argparse import ArgumentParser, Namespace
from logging import getLogger
from pathlib import Path
from typing import Optional, Sequence

from kognit.archive import decode, encode
from kognit.codec import FileCodecName, get_codec
from kognit.config import AppConfig, get_app_config
from kognit.errors import ArchiveError
from kognit.types import ArchiveFormat
from kognit.version import __version__


def config_logging(level: str):
    logging.basicConfig(level=level, format="%(asctime)s | %(levelname)s | %(name)s - %(message)s")


def get_args(argv: Optional[Sequence[str]] = None) -> Namespace:
    parser = ArgumentParser(prog="kognit", description="Archive directories and compress files.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    format_choices = [archive_format.value for archive_format in ArchiveFormat]

    encode_parser = subparsers.add_parser("encode", help="Archive a directory into PATH.zip or PATH.tar.gz")
    encode_parser.add_argument("path", type=Path, help="Directory to archive")
    encode_parser.add_argument("-f", "--format", choices=format_choices, default=None, help="Archive format")

    decode_parser = subparsers.add_parser("decode", help="Extract an archive")
    decode_parser.add_argument("path", type=Path, help="Archive to extract")
    decode_parser.add_argument(
        "-d", "--destination", type=Path, default=None, help="Extraction directory (default: archive directory)"
    )
    decode_parser.add_argument(
        "-f", "--format", choices=format_choices, default=None, help="Archive format (default: detect)"
    )

    compress_parser = subparsers.add_parser("compress", help="Compress a single file")
    compress_parser.add_argument("path", type=Path, help="File to compress")
    compress_parser.add_argument(
        "-a", "--algorithm", default=FileCodecName.HUFFMAN.value, help="Codec used to compress the file"
    )

    return parser.parse_args(argv)


async def run_command(args: Namespace, config: AppConfig):
    archive_format = ArchiveFormat(args.format) if getattr(args, "format", None) else None
    if args.command == "encode":
        await encode(args.path, archive_format or config.default_format, config)
    elif args.command == "decode":
        destination = args.destination or args.path.absolute().parent
        await decode(args.path, destination, archive_format, config)
    elif args.command == "compress":
        get_codec(args.algorithm).encode(args.path)


async def amain(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    args = get_args(argv)
    config = get_app_config()
    config_logging(config.log_level)
    logger = getLogger("kognit")
    logger.debug("App config: %s", config.model_dump())
    logger.debug("kognit CLI got these arguments: %s", args)
    try:
        await run_command(args, config)
    except ArchiveError as error:
        logger.error("%s failed: %s", args.command, error)
        return 1
    logger.info("Done")
    return 0


def main():
    sys.exit(asyncio.run(amain()))


if __name__ == "__main__":
    main()
