import asyncio
import gzip
import tarfile
import zlib
from logging import getLogger
from pathlib import Path
from tarfile import TarFile, TarInfo

from kognit.compression.base import (
    DEFAULT_COMPRESSION_LEVEL,
    ArchiveAlgorithm,
    extract_file,
    restore_directory_modes,
    translate_errors,
)
from kognit.errors import FormatError
from kognit.file import resolve_entry_path
from kognit.types import Entry
from kognit.walker import walk_tree

READ_CHUNK_SIZE = 64 * 1024

FORMAT_ERRORS = (tarfile.TarError, gzip.BadGzipFile, EOFError, zlib.error)


class TarGzipAlgorithm(ArchiveAlgorithm):
    """Tar stream compressed as a whole by a single gzip stream."""

    def __init__(self, compression_level: int = DEFAULT_COMPRESSION_LEVEL, follow_symlinks: bool = False):
        self._compression_level = compression_level
        self._follow_symlinks = follow_symlinks
        self._logger = getLogger(__name__)

    async def compress(self, source_directory: Path, target_archive: Path) -> None:
        await asyncio.to_thread(self._compress, source_directory, target_archive)

    def _compress(self, source_directory: Path, target_archive: Path) -> None:
        with translate_errors(target_archive, "tar.gz"):
            # Closing order (tar, gzip, file) writes the end-of-archive blocks before the gzip trailer.
            with (
                target_archive.open("wb") as file,
                gzip.GzipFile(filename="", mode="wb", fileobj=file, compresslevel=self._compression_level) as gzip_file,
                tarfile.open(fileobj=gzip_file, mode="w", format=tarfile.PAX_FORMAT) as tar_file,
            ):
                for entry in walk_tree(source_directory, self._follow_symlinks):
                    self._add_entry(tar_file, entry)

    def _add_entry(self, tar_file: TarFile, entry: Entry) -> None:
        info = TarInfo(entry.name)
        info.mode = entry.mode
        info.mtime = int(entry.mtime)
        if entry.is_dir:
            info.type = tarfile.DIRTYPE
            tar_file.addfile(info)
        elif entry.is_file:
            info.type = tarfile.REGTYPE
            info.size = entry.size
            with entry.path.open("rb") as source:
                tar_file.addfile(info, source)
        else:
            self._logger.warning('Skipping "%s", only files and directories can be archived', entry.path)
            return
        self._logger.debug('Added "%s" to tar archive', entry.name)

    async def extract(self, source_archive: Path, target_directory: Path) -> None:
        await asyncio.to_thread(self._extract, source_archive, target_directory)

    def _extract(self, source_archive: Path, target_directory: Path) -> None:
        with translate_errors(source_archive, "tar.gz", FORMAT_ERRORS):
            with (
                source_archive.open("rb") as file,
                gzip.GzipFile(mode="rb", fileobj=file) as gzip_file,
                tarfile.open(fileobj=gzip_file, mode="r|") as tar_file,
            ):
                target_directory.mkdir(parents=True, exist_ok=True)
                directory_modes: dict[Path, int] = {}
                for member in tar_file:
                    self._extract_member(tar_file, member, target_directory, directory_modes)

                # The tar end marker may be followed by padding. Reading the rest of the gzip stream
                # verifies its trailer, so a truncated archive is never accepted.
                while gzip_file.read(READ_CHUNK_SIZE):
                    pass

                restore_directory_modes(directory_modes)

    def _extract_member(
        self, tar_file: TarFile, member: TarInfo, target_directory: Path, directory_modes: dict[Path, int]
    ) -> None:
        target = resolve_entry_path(target_directory, member.name)
        if member.isdir():
            target.mkdir(parents=True, exist_ok=True)
            directory_modes[target] = member.mode
        elif member.isreg():
            source = tar_file.extractfile(member)
            if source is None:
                raise FormatError(f'Tar entry "{member.name}" has no content')
            with source:
                extract_file(source, target, member.mode)
        else:
            raise FormatError(f'Tar entry "{member.name}" has unsupported type {member.type!r}')
        self._logger.debug('Extracted "%s" from tar archive', member.name)
