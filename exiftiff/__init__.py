"""exiftiff -- TIFF/BigTIFF container decoder for EXIF metadata extraction."""

__version__ = "1.0.0"

from exiftiff.config import DecoderConfig
from exiftiff.errors import (
    EndOfInputError,
    RecursiveIFDError,
    StructuralError,
    TagFormatError,
    TiffError,
    UnhandledTagTypeError,
)
from exiftiff.tiff import Dir, Tag, Tiff, decode, decode_dir
from exiftiff.mknote import MakerNoteParser, MakerNoteRegistry, default_registry

__all__ = [
    "__version__",
    "DecoderConfig",
    "TiffError",
    "StructuralError",
    "UnhandledTagTypeError",
    "EndOfInputError",
    "RecursiveIFDError",
    "TagFormatError",
    "Tiff",
    "Dir",
    "Tag",
    "decode",
    "decode_dir",
    "MakerNoteParser",
    "MakerNoteRegistry",
    "default_registry",
]
