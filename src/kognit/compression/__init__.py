from .base import ArchiveAlgorithm, CompressionAlgorithm, DecompressionAlgorithm
from .tar import TarGzipAlgorithm
from .zip import ZipAlgorithm

__all__ = [
    "ArchiveAlgorithm",
    "CompressionAlgorithm",
    "DecompressionAlgorithm",
    "TarGzipAlgorithm",
    "ZipAlgorithm",
]
