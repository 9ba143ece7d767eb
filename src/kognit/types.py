from enum import Enum
from pathlib import Path

from pydantic.dataclasses import dataclass


class ArchiveFormat(str, Enum):
    ZIP = "zip"
    TAR_GZ = "tar.gz"

    @property
    def suffix(self) -> str:
        """File name suffix of archives in this format, including the leading dot."""
        return f".{self.value}"


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


# Snapshot of a single filesystem object taken while walking a directory tree.
@dataclass(frozen=True)
class Entry:
    path: Path
    name: str
    kind: EntryKind
    mode: int
    size: int
    mtime: float

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY
