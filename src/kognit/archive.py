"""Encode a directory into an archive and decode it again.

This is the only place where an ArchiveFormat is mapped to an algorithm.

An encode writes to a temporary file next to the final archive and renames it when done,
so a failed encode never leaves an archive that looks complete. A failed decode leaves
everything extracted up to the failure in the destination directory.
"""

import os
from logging import getLogger
from pathlib import Path
from typing import Optional
from uuid import uuid4

from filetype import guess

from kognit.compression import ArchiveAlgorithm, TarGzipAlgorithm, ZipAlgorithm
from kognit.config import AppConfig
from kognit.errors import ArchiveIOError, FormatError, InputError
from kognit.types import ArchiveFormat

# Dictionary mapping an ArchiveFormat to its algorithm class
ARCHIVE_ALGORITHMS: dict[ArchiveFormat, type[ArchiveAlgorithm]] = {
    ArchiveFormat.ZIP: ZipAlgorithm,
    ArchiveFormat.TAR_GZ: TarGzipAlgorithm,
}

# Dictionary mapping a file extension guessed from the file content to ArchiveFormat
GUESSED_FORMATS: dict[str, ArchiveFormat] = {
    "zip": ArchiveFormat.ZIP,
    "gz": ArchiveFormat.TAR_GZ,
}

_logger = getLogger(__name__)


def get_algorithm(archive_format: ArchiveFormat, config: Optional[AppConfig] = None) -> ArchiveAlgorithm:
    config = config or AppConfig()
    algorithm_type = ARCHIVE_ALGORITHMS.get(archive_format)
    if algorithm_type is None:
        raise NotImplementedError(f'Archive format "{archive_format}" not supported.')
    return algorithm_type(compression_level=config.compression_level, follow_symlinks=config.follow_symlinks)


def archive_path_for(root: Path, archive_format: ArchiveFormat) -> Path:
    """Return the path of the archive created for root, e.g. "data" -> "data.tar.gz"."""
    return root.with_name(root.name + archive_format.suffix)


def detect_format(archive: Path) -> ArchiveFormat:
    """Determine the archive format using content and extension."""
    try:
        most_likely_type = guess(archive)
    except OSError as error:
        raise InputError(f'Can not read archive "{archive}": {error}') from error
    if most_likely_type is not None and most_likely_type.extension in GUESSED_FORMATS:
        return GUESSED_FORMATS[most_likely_type.extension]
    for archive_format in ArchiveFormat:
        if archive.name.endswith(archive_format.suffix):
            return archive_format
    if archive.name.endswith(".tgz"):
        return ArchiveFormat.TAR_GZ
    raise FormatError(f'Unable to determine archive format of "{archive}"')


async def encode(root: Path, archive_format: ArchiveFormat, config: Optional[AppConfig] = None) -> Path:
    """Archive the directory root into a new file named root + format suffix. Return the archive path."""

    root = root.resolve()
    if not root.is_dir():
        raise InputError(f'Directory "{root}" does not exist')
    if not root.name:
        raise InputError(f'Can not create an archive next to "{root}"')
    algorithm = get_algorithm(archive_format, config)
    target = archive_path_for(root, archive_format)
    temp_target = target.with_name(f".{target.name}.{uuid4().hex}.tmp")

    _logger.info('Encoding "%s" to "%s"...', root, target)
    try:
        await algorithm.compress(root, temp_target)
        temp_target.replace(target)
    except OSError as error:
        raise ArchiveIOError(f'Can not create archive "{target}": {error}') from error
    finally:
        temp_target.unlink(missing_ok=True)
    _logger.info('Created "%s" (%s bytes)', target, target.stat().st_size)
    return target


async def decode(
    archive: Path,
    destination: Path,
    archive_format: Optional[ArchiveFormat] = None,
    config: Optional[AppConfig] = None,
) -> None:
    """Extract archive into destination, which is created if missing.
    If archive_format is None, the format is determined from the archive itself."""

    if not archive.is_file():
        raise InputError(f'Archive "{archive}" does not exist')
    if not os.access(archive, os.R_OK):
        raise InputError(f'Archive "{archive}" is not readable')
    if archive_format is None:
        archive_format = detect_format(archive)
    algorithm = get_algorithm(archive_format, config)

    _logger.info('Decoding "%s" (%s) to "%s"...', archive, archive_format.value, destination)
    await algorithm.extract(archive, destination)
    _logger.info('Extracted "%s"', archive)
