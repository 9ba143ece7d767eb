class ArchiveError(Exception):
    """Base class of all errors raised by kognit."""


class InputError(ArchiveError):
    """Source directory or archive is missing or unreadable."""


class FormatError(ArchiveError):
    """Archive does not parse as the declared format or contains an unsupported entry type."""


class SecurityError(ArchiveError):
    """An archive entry resolves to a path outside of the extraction directory."""


class ArchiveIOError(ArchiveError):
    """Reading or writing failed on the filesystem level."""


class CodecNotImplementedError(ArchiveError):
    """The selected codec exists by name but has no implementation."""
