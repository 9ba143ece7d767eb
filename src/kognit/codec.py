from abc import ABC, abstractmethod
from enum import Enum
from logging import getLogger
from pathlib import Path

from kognit.errors import CodecNotImplementedError, InputError


class FileCodecName(str, Enum):
    FLATE = "flate"
    GZIP = "gzip"
    HUFFMAN = "huffman"
    LZ77 = "lz77"
    LZW = "lzw"
    RLE = "rle"


class ImageCodecName(str, Enum):
    JPEG = "jpeg"
    JPEG2000 = "jpeg2000"
    PNG = "png"
    GIF = "gif"


class Codec(ABC):
    """Interface. A codec compresses or decompresses a single file."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name the codec is selected by."""

    @abstractmethod
    def encode(self, path: Path) -> Path:
        """Encode the file at path. Return the path of the encoded file."""

    @abstractmethod
    def decode(self, path: Path) -> Path:
        """Decode the file at path. Return the path of the decoded file."""


class UnimplementedCodec(Codec):
    """Placeholder for a codec that is known by name but has no implementation yet."""

    def __init__(self, name: str):
        self._name = name
        self._logger = getLogger(__name__)

    @property
    def name(self) -> str:
        return self._name

    def encode(self, path: Path) -> Path:
        return self._fail("encoding", path)

    def decode(self, path: Path) -> Path:
        return self._fail("decoding", path)

    def _fail(self, operation: str, path: Path) -> Path:
        if not path.is_file():
            raise InputError(f'File "{path}" does not exist')
        self._logger.debug("Requested %s of %s using %s", operation, path, self._name)
        raise CodecNotImplementedError(f'File {operation} using "{self._name}" is not implemented')


# Dictionary mapping a codec name to Codec
CODECS: dict[str, Codec] = {
    codec_name.value: UnimplementedCodec(codec_name.value) for codec_name in [*FileCodecName, *ImageCodecName]
}


def get_codec(name: str) -> Codec:
    codec = CODECS.get(name.lower())
    if codec is None:
        raise InputError(f'Invalid codec "{name}", choose one of: {", ".join(CODECS)}')
    return codec
