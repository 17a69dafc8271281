"""Tag records: type table, on-disk decoding, lazy value accessors.

A classic TIFF tag record is 12 bytes (id, type, count, 4-byte value slot);
a BigTIFF record is 20 bytes (id, type, 8-byte count, 8-byte value slot).
Values that fit the slot are stored inline, larger ones live at the offset
held in the slot.
"""

import json
import struct
from dataclasses import dataclass
from fractions import Fraction
from typing import BinaryIO, Callable, Dict, NamedTuple, Optional, Tuple

from exiftiff.errors import (
    TagFormatError,
    UnhandledTagTypeError,
    read_error,
)
from exiftiff.tiff.reader import LITTLE_ENDIAN, offset_format, read_at, read_exact

# Value categories
FORMAT_INT = 'int'
FORMAT_FLOAT = 'float'
FORMAT_RATIONAL = 'rational'
FORMAT_STRING = 'string'
FORMAT_UNDEFINED = 'undefined'


def _numbers(char: str, per_value: int = 1) -> Callable[[bytes, str], tuple]:
    """Build a decoder unpacking ``char`` elements from a raw value."""
    width = struct.calcsize('<' + char)

    def decode(raw: bytes, endian: str) -> tuple:
        n = len(raw) // width
        flat = struct.unpack(f'{endian}{n}{char}', raw[:n * width])
        if per_value == 1:
            return flat
        return tuple(zip(flat[0::2], flat[1::2]))
    return decode


def _raw(raw: bytes, endian: str) -> bytes:
    return raw


class TagType(NamedTuple):
    name: str
    size: int
    format: str
    decode: Callable[[bytes, str], object]


# {type_code: TagType}.  Codes missing here are unhandled.
TIFF_TYPES: Dict[int, TagType] = {
    1: TagType('BYTE', 1, FORMAT_INT, _numbers('B')),
    2: TagType('ASCII', 1, FORMAT_STRING, _raw),
    3: TagType('SHORT', 2, FORMAT_INT, _numbers('H')),
    4: TagType('LONG', 4, FORMAT_INT, _numbers('I')),
    5: TagType('RATIONAL', 8, FORMAT_RATIONAL, _numbers('I', 2)),
    6: TagType('SBYTE', 1, FORMAT_INT, _numbers('b')),
    7: TagType('UNDEFINED', 1, FORMAT_UNDEFINED, _raw),
    8: TagType('SSHORT', 2, FORMAT_INT, _numbers('h')),
    9: TagType('SLONG', 4, FORMAT_INT, _numbers('i')),
    10: TagType('SRATIONAL', 8, FORMAT_RATIONAL, _numbers('i', 2)),
    11: TagType('FLOAT', 4, FORMAT_FLOAT, _numbers('f')),
    12: TagType('DOUBLE', 8, FORMAT_FLOAT, _numbers('d')),
    13: TagType('IFD', 4, FORMAT_INT, _numbers('I')),
    16: TagType('LONG8', 8, FORMAT_INT, _numbers('Q')),
    17: TagType('SLONG8', 8, FORMAT_INT, _numbers('q')),
    18: TagType('IFD8', 8, FORMAT_INT, _numbers('Q')),
}

# Well-known baseline TIFF and EXIF tag names
TAG_NAMES: Dict[int, str] = {
    254: 'NewSubfileType', 256: 'ImageWidth', 257: 'ImageLength',
    258: 'BitsPerSample', 259: 'Compression', 262: 'PhotometricInterpretation',
    270: 'ImageDescription', 271: 'Make', 272: 'Model',
    273: 'StripOffsets', 274: 'Orientation', 277: 'SamplesPerPixel',
    278: 'RowsPerStrip', 279: 'StripByteCounts',
    282: 'XResolution', 283: 'YResolution', 296: 'ResolutionUnit',
    305: 'Software', 306: 'DateTime', 315: 'Artist', 316: 'HostComputer',
    324: 'TileOffsets', 325: 'TileByteCounts', 330: 'SubIFDs',
    513: 'JPEGInterchangeFormat', 514: 'JPEGInterchangeFormatLength',
    531: 'YCbCrPositioning', 33432: 'Copyright',
    33434: 'ExposureTime', 33437: 'FNumber',
    34665: 'ExifIFDPointer', 34853: 'GPSInfoIFDPointer',
    34855: 'ISOSpeedRatings', 36864: 'ExifVersion',
    36867: 'DateTimeOriginal', 36868: 'DateTimeDigitized',
    37386: 'FocalLength', 37500: 'MakerNote', 37510: 'UserComment',
    40965: 'InteroperabilityIFDPointer', 42016: 'ImageUniqueID',
}

EXIF_IFD_POINTER_TAG = 34665
GPS_IFD_POINTER_TAG = 34853
MAKER_NOTE_TAG = 37500


@dataclass(frozen=True)
class Tag:
    """One decoded tag record.

    ``val`` holds the raw value bytes in file byte order; every accessor
    interprets them on demand from ``type`` and ``endian``.
    """
    id: int = 0
    type: int = 7
    count: int = 0
    val: bytes = b''
    endian: str = LITTLE_ENDIAN
    val_offset: Optional[int] = None  # absolute offset, None when inline

    @property
    def name(self) -> str:
        return TAG_NAMES.get(self.id, f'Tag_{self.id}')

    @property
    def type_name(self) -> str:
        return TIFF_TYPES[self.type].name

    @property
    def format(self) -> str:
        return TIFF_TYPES[self.type].format

    def values(self):
        """All components: a tuple of numbers/pairs, or bytes for text types."""
        return TIFF_TYPES[self.type].decode(self.val, self.endian)

    def _numeric(self, expected: str, i: int):
        if self.format != expected:
            raise TagFormatError(
                f'tag {self.id} is {self.format}, not {expected}')
        return self.values()[i]

    def int_val(self, i: int = 0) -> int:
        return self._numeric(FORMAT_INT, i)

    def ints(self) -> Tuple[int, ...]:
        if self.format != FORMAT_INT:
            raise TagFormatError(f'tag {self.id} is {self.format}, not {FORMAT_INT}')
        return self.values()

    def float_val(self, i: int = 0) -> float:
        return self._numeric(FORMAT_FLOAT, i)

    def rat2(self, i: int = 0) -> Tuple[int, int]:
        """Numerator and denominator of the i-th rational, unreduced."""
        return self._numeric(FORMAT_RATIONAL, i)

    def rat(self, i: int = 0) -> Fraction:
        num, den = self.rat2(i)
        if den == 0:
            raise TagFormatError(f'tag {self.id} rational {i} has zero denominator')
        return Fraction(num, den)

    def string_val(self) -> str:
        """ASCII value up to the first NUL."""
        if self.format != FORMAT_STRING:
            raise TagFormatError(
                f'tag {self.id} is {self.format}, not {FORMAT_STRING}')
        return _nul_terminated(self.val)

    def to_json(self):
        fmt = self.format
        if fmt in (FORMAT_STRING, FORMAT_UNDEFINED):
            return _nul_terminated(self.val)
        if fmt == FORMAT_RATIONAL:
            return [f'{num}/{den}' for num, den in self.values()]
        return list(self.values())

    def __str__(self) -> str:
        text = json.dumps(self.to_json())
        if self.count == 1:
            return text.strip('[]')
        return text


def _nul_terminated(raw: bytes) -> str:
    end = raw.find(b'\x00')
    if end >= 0:
        raw = raw[:end]
    return raw.decode('utf-8', errors='replace')


def decode_tag(f: BinaryIO, endian: str, is_big: bool = False) -> Tag:
    """Decode the tag record at the current stream position.

    The full record is always consumed, so the caller can move on to the
    next record even when this one raises ``UnhandledTagTypeError``.
    Out-of-line values are fetched without moving the stream.
    """
    head = endian + ('HHQ' if is_big else 'HHI')
    slot_size = 8 if is_big else 4
    try:
        tag_id, type_code, count = struct.unpack(
            head, read_exact(f, struct.calcsize(head)))
        slot = read_exact(f, slot_size)
    except (OSError, EOFError) as e:
        raise read_error('tag record read failed', e) from e

    tag_type = TIFF_TYPES.get(type_code)
    if tag_type is None:
        raise UnhandledTagTypeError(type_code)

    val_len = tag_type.size * count
    if val_len <= slot_size:
        return Tag(tag_id, type_code, count, slot[:val_len], endian)

    val_offset = struct.unpack(endian + offset_format(is_big), slot)[0]
    try:
        val = read_at(f, val_offset, val_len)
    except (OSError, EOFError, OverflowError, ValueError) as e:
        raise read_error(f'tag {tag_id} value read failed', e) from e
    return Tag(tag_id, type_code, count, val, endian, val_offset)
