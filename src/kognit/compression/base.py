from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from shutil import copyfileobj
from typing import IO, Iterator, Optional

from kognit.errors import ArchiveError, ArchiveIOError, FormatError

# Compression level used when none is configured. Valid levels are 0 (store) to 9 (best).
DEFAULT_COMPRESSION_LEVEL = 6

# Only rwx bits are restored on extraction, setuid, setgid and sticky bits are dropped.
PERMISSION_BITS = 0o777


class CompressionAlgorithm(ABC):
    @abstractmethod
    async def compress(self, source_directory: Path, target_archive: Path) -> None:
        """Compress source_directory and write it to target_archive (should include extension)."""
        ...


class DecompressionAlgorithm(ABC):
    @abstractmethod
    async def extract(self, source_archive: Path, target_directory: Path) -> None:
        """Extract source_archive and write it to target_directory."""
        ...


class ArchiveAlgorithm(CompressionAlgorithm, DecompressionAlgorithm):
    """An archive format that can both be written and read."""


@contextmanager
def translate_errors(
    archive: Path, format_name: str, format_errors: tuple[type[Exception], ...] = ()
) -> Iterator[None]:
    """Convert low level errors raised while processing archive into ArchiveErrors.

    Exceptions listed in format_errors become FormatError, any other OSError becomes ArchiveIOError.
    ArchiveErrors pass unchanged."""

    try:
        yield
    except ArchiveError:
        raise
    except format_errors as error:
        raise FormatError(f'"{archive}" is not a valid {format_name} archive: {error}') from error
    except OSError as error:
        raise ArchiveIOError(f'I/O error while processing "{archive}": {error}') from error


def extract_file(source: IO[bytes], target: Path, mode: Optional[int]) -> None:
    """Copy source into target (truncating an existing file) and apply the permission bits, if known.
    Missing parent directories are created."""

    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("wb") as target_file:
        copyfileobj(source, target_file)
    if mode is not None:
        target.chmod(mode & PERMISSION_BITS)


def restore_directory_modes(directory_modes: dict[Path, int]) -> None:
    """Apply permission bits to extracted directories, deepest first.
    Must be called after all entries are extracted."""

    for directory in sorted(directory_modes, key=lambda path: len(path.parts), reverse=True):
        directory.chmod(directory_modes[directory] & PERMISSION_BITS)
