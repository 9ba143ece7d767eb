from kognit.archive import decode as decode
from kognit.archive import encode as encode
from kognit.errors import ArchiveError as ArchiveError
from kognit.errors import ArchiveIOError as ArchiveIOError
from kognit.errors import CodecNotImplementedError as CodecNotImplementedError
from kognit.errors import FormatError as FormatError
from kognit.errors import InputError as InputError
from kognit.errors import SecurityError as SecurityError
from kognit.types import ArchiveFormat as ArchiveFormat
from kognit.version import __version__

# List of all imports visible when importing this module.
__all__ = [
    "ArchiveError",
    "ArchiveFormat",
    "ArchiveIOError",
    "CodecNotImplementedError",
    "FormatError",
    "InputError",
    "SecurityError",
    "decode",
    "encode",
    "__version__",
]
