import asyncio
import stat
import zlib
from logging import getLogger
from pathlib import Path
from typing import Optional
from zipfile import ZIP_DEFLATED, BadZipFile, ZipFile, ZipInfo

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

CREATE_SYSTEM_UNIX = 3
ENCRYPTED_FLAG = 0x1

FORMAT_ERRORS = (BadZipFile, EOFError, zlib.error, NotImplementedError)


class ZipAlgorithm(ArchiveAlgorithm):
    """ZIP container, every file is deflated on its own and listed in the central directory."""

    def __init__(self, compression_level: int = DEFAULT_COMPRESSION_LEVEL, follow_symlinks: bool = False):
        self._compression_level = compression_level
        self._follow_symlinks = follow_symlinks
        self._logger = getLogger(__name__)

    async def compress(self, source_directory: Path, target_archive: Path) -> None:
        await asyncio.to_thread(self._compress, source_directory, target_archive)

    def _compress(self, source_directory: Path, target_archive: Path) -> None:
        with translate_errors(target_archive, "zip"):
            # Timestamps outside of the ZIP range (1980-2107) are clamped instead of failing.
            with ZipFile(
                target_archive, "w", ZIP_DEFLATED, compresslevel=self._compression_level, strict_timestamps=False
            ) as zip_file:
                for entry in walk_tree(source_directory, self._follow_symlinks):
                    self._add_entry(zip_file, entry)

    def _add_entry(self, zip_file: ZipFile, entry: Entry) -> None:
        if not (entry.is_file or entry.is_dir):
            self._logger.warning('Skipping "%s", only files and directories can be archived', entry.path)
            return
        # Directories get a trailing slash, files are streamed and deflated.
        zip_file.write(entry.path, entry.name)
        self._logger.debug('Added "%s" to zip archive', entry.name)

    async def extract(self, source_archive: Path, target_directory: Path) -> None:
        await asyncio.to_thread(self._extract, source_archive, target_directory)

    def _extract(self, source_archive: Path, target_directory: Path) -> None:
        with translate_errors(source_archive, "zip", FORMAT_ERRORS):
            with ZipFile(source_archive, "r") as zip_file:
                infos = zip_file.infolist()
                # Check all names before writing anything. One bad entry invalidates the whole archive.
                targets = [resolve_entry_path(target_directory, info.filename) for info in infos]

                target_directory.mkdir(parents=True, exist_ok=True)
                directory_modes: dict[Path, int] = {}
                for info, target in zip(infos, targets):
                    mode = _unix_mode(info)
                    if info.is_dir():
                        target.mkdir(parents=True, exist_ok=True)
                        if mode is not None:
                            directory_modes[target] = stat.S_IMODE(mode)
                    else:
                        _check_regular_file(info, mode)
                        with zip_file.open(info, "r") as source:
                            extract_file(source, target, None if mode is None else stat.S_IMODE(mode))
                    self._logger.debug('Extracted "%s" from zip archive', info.filename)

                restore_directory_modes(directory_modes)


def _unix_mode(info: ZipInfo) -> Optional[int]:
    """Return the st_mode recorded by a Unix producer, or None if there is none."""
    if info.create_system != CREATE_SYSTEM_UNIX:
        return None
    return (info.external_attr >> 16) or None


def _check_regular_file(info: ZipInfo, mode: Optional[int]):
    if info.flag_bits & ENCRYPTED_FLAG:
        raise FormatError(f'Zip entry "{info.filename}" is encrypted')
    if mode is not None and stat.S_IFMT(mode) not in (0, stat.S_IFREG):
        raise FormatError(f'Zip entry "{info.filename}" has unsupported file type {oct(stat.S_IFMT(mode))}')
