import os
import stat
from logging import getLogger
from pathlib import Path
from typing import Iterator

from kognit.errors import InputError
from kognit.types import Entry, EntryKind

_logger = getLogger(__name__)


def walk_tree(root: Path, follow_symlinks: bool = False) -> Iterator[Entry]:
    """Yield an Entry for every filesystem object below root (root itself excluded).

    The traversal is depth-first and top-down, with directories and files visited in sorted order,
    so an unmodified tree is always walked in the same order. A directory is yielded before its contents.
    Symlinks are classified as EntryKind.OTHER unless follow_symlinks is set. When following symlinks,
    directories that were already visited are skipped to prevent cycles."""

    if not root.is_dir():
        raise InputError(f'"{root}" is not an existing directory')
    if not os.access(root, os.R_OK | os.X_OK):
        raise InputError(f'Directory "{root}" is not readable')

    visited: set[tuple[int, int]] = set()
    if follow_symlinks:
        visited.add(_inode(root.stat()))

    for current, dirnames, filenames in root.walk(on_error=_raise_input_error, follow_symlinks=follow_symlinks):
        if current != root:
            yield _make_entry(root, current, current.stat())

        dirnames.sort()
        if follow_symlinks:
            for dirname in list(dirnames):
                key = _inode((current / dirname).stat())
                if key in visited:
                    _logger.warning('Skipping "%s", directory was already visited', current / dirname)
                    dirnames.remove(dirname)
                else:
                    visited.add(key)

        for filename in sorted(filenames):
            path = current / filename
            try:
                stat_result = path.stat() if follow_symlinks else path.lstat()
            except OSError as error:
                raise InputError(f'Can not read "{path}": {error}') from error
            yield _make_entry(root, path, stat_result)


def _make_entry(root: Path, path: Path, stat_result: os.stat_result) -> Entry:
    if stat.S_ISDIR(stat_result.st_mode):
        kind = EntryKind.DIRECTORY
    elif stat.S_ISREG(stat_result.st_mode):
        kind = EntryKind.FILE
    else:
        kind = EntryKind.OTHER

    return Entry(
        path=path,
        name=path.relative_to(root).as_posix(),
        kind=kind,
        mode=stat.S_IMODE(stat_result.st_mode),
        size=stat_result.st_size if kind == EntryKind.FILE else 0,
        mtime=stat_result.st_mtime,
    )


def _inode(stat_result: os.stat_result) -> tuple[int, int]:
    return stat_result.st_dev, stat_result.st_ino


def _raise_input_error(error: OSError):
    raise InputError(f'Can not read "{error.filename}": {error.strerror}') from error
