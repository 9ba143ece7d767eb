import posixpath
from pathlib import Path, PureWindowsPath

from kognit.errors import SecurityError


def build_real_sub_path(base_path: Path, sub_path: Path | str) -> Path:
    """Combine base_path and sub_path, enforcing that the resulting path is a sub path of base_path."""
    full_path = base_path / sub_path
    if not is_real_subpath(full_path, base_path):
        raise SecurityError(f"{sub_path} escapes the base path {base_path}")
    return full_path


def is_real_subpath(path: Path, base_path: Path) -> bool:
    """Check if path is a real subpath of base_path."""
    path_resolved = path.resolve()
    base_path_resolved = base_path.resolve()
    return path_resolved != base_path_resolved and path_resolved.is_relative_to(base_path_resolved)


def normalize_entry_name(entry_name: str) -> str:
    """Normalize an archive entry name to a relative POSIX path.

    Backslashes are treated as separators and "." / ".." segments are collapsed.
    Raises SecurityError for empty, absolute or drive-qualified names and for names leaving their root."""

    if not entry_name:
        raise SecurityError("Archive entry without a name")
    name = entry_name.replace("\\", "/")
    if posixpath.isabs(name) or PureWindowsPath(entry_name).drive:
        raise SecurityError(f'Archive entry "{entry_name}" has an absolute path')
    normalized = posixpath.normpath(name)
    if normalized == ".." or normalized.startswith("../"):
        raise SecurityError(f'Archive entry "{entry_name}" escapes the extraction directory')
    return normalized


def resolve_entry_path(destination: Path, entry_name: str) -> Path:
    """Return the path an archive entry is extracted to.

    The entry name is first checked lexically, then the joined path is resolved so that symlinks
    already present below destination can't redirect the entry outside of it either."""

    normalized = normalize_entry_name(entry_name)
    if normalized == ".":
        return destination
    try:
        return build_real_sub_path(destination, normalized)
    except SecurityError as error:
        raise SecurityError(f'Archive entry "{entry_name}" escapes the extraction directory') from error
