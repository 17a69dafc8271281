"""Nikon type 3 maker notes.

Layout: ``"Nikon\\0"``, a 2-byte version, 2 padding bytes, then a complete
TIFF structure whose offsets are relative to its own header at byte 10.
"""

import io
from typing import Optional

from exiftiff.config import DecoderConfig
from exiftiff.mknote.base import MakerNoteParser
from exiftiff.tiff import Tag, Tiff, decode

NIKON_V3_SIGNATURE = b'Nikon\x00'
NIKON_V3_TIFF_START = 10


class NikonV3Parser(MakerNoteParser):

    name = 'nikon_v3'

    def has_valid_value(self, val: Optional[bytes]) -> bool:
        if not val or len(val) < len(NIKON_V3_SIGNATURE):
            return False
        return val[:len(NIKON_V3_SIGNATURE)] == NIKON_V3_SIGNATURE

    def parse(self, tag: Tag, config: Optional[DecoderConfig] = None) -> Tiff:
        return decode(io.BytesIO(tag.val[NIKON_V3_TIFF_START:]), config)


NIKON_V3 = NikonV3Parser()
