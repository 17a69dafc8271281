"""Low-level TIFF/BigTIFF binary decoder package.

Re-exports the public names so ``from exiftiff.tiff import X`` works for
everything the submodules define.
"""

# --- reader.py: stream helpers ---
from exiftiff.tiff.reader import (  # noqa: F401
    BIG_ENDIAN,
    LITTLE_ENDIAN,
    SectionReader,
    read_offset,
)

# --- tag.py: type table, tag record decoding ---
from exiftiff.tiff.tag import (  # noqa: F401
    EXIF_IFD_POINTER_TAG,
    FORMAT_FLOAT,
    FORMAT_INT,
    FORMAT_RATIONAL,
    FORMAT_STRING,
    FORMAT_UNDEFINED,
    GPS_IFD_POINTER_TAG,
    MAKER_NOTE_TAG,
    TAG_NAMES,
    TIFF_TYPES,
    Tag,
    TagType,
    decode_tag,
)

# --- models.py: decoded container ---
from exiftiff.tiff.models import Dir, Tiff  # noqa: F401

# --- parser.py: header, IFD and chain decoding ---
from exiftiff.tiff.parser import (  # noqa: F401
    BIGTIFF_MAGIC,
    TIFF_MAGIC,
    decode,
    decode_dir,
)
