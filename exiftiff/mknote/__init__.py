"""Maker-note parser registry -- dispatch by raw-value signature.

A registry is an ordinary value owned by the caller.  Parsers are probed
in registration order and the first whose signature check accepts the
maker-note bytes wins; no parser runs speculatively.
"""

import logging
from typing import BinaryIO, Iterator, List, Optional, Tuple

from exiftiff.config import DecoderConfig
from exiftiff.errors import StructuralError
from exiftiff.mknote.base import MakerNoteParser
from exiftiff.mknote.nikon import NIKON_V3, NikonV3Parser
from exiftiff.tiff import (
    EXIF_IFD_POINTER_TAG,
    MAKER_NOTE_TAG,
    Tag,
    Tiff,
    decode_dir,
)

logger = logging.getLogger(__name__)


class MakerNoteRegistry:
    """Ordered collection of maker-note parsers."""

    def __init__(self, parsers: Optional[List[MakerNoteParser]] = None):
        self._parsers: List[MakerNoteParser] = list(parsers or [])

    def register(self, parser: MakerNoteParser) -> MakerNoteParser:
        """Append a parser; earlier registrations take priority."""
        self._parsers.append(parser)
        return parser

    def __iter__(self) -> Iterator[MakerNoteParser]:
        return iter(self._parsers)

    def __len__(self) -> int:
        return len(self._parsers)

    def find(self, tag: Tag) -> Optional[MakerNoteParser]:
        """Return the first parser that claims ``tag``, or None."""
        for parser in self._parsers:
            if parser.claims(tag):
                logger.debug("maker note claimed by %s", parser.name)
                return parser
        return None

    def parse(self, tag: Tag,
              config: Optional[DecoderConfig] = None) -> Optional[Tuple[str, Tiff]]:
        """Decode ``tag`` with the first claiming parser.

        Returns (parser_name, decoded) or None when no parser claims it.
        """
        parser = self.find(tag)
        if parser is None:
            return None
        return parser.name, parser.parse(tag, config)


def default_registry() -> MakerNoteRegistry:
    """A fresh registry holding the built-in vendor parsers."""
    return MakerNoteRegistry([NIKON_V3])


def locate_maker_note(f: BinaryIO, tiff: Tiff) -> Optional[Tag]:
    """Find the MakerNote tag in the IFD chain or in the EXIF sub-IFD.

    ``f`` must be the stream ``tiff`` was decoded from.
    """
    tag = tiff.find_tag(MAKER_NOTE_TAG)
    if tag is not None:
        return tag

    pointer = tiff.find_tag(EXIF_IFD_POINTER_TAG)
    if pointer is None or not pointer.count:
        return None
    try:
        f.seek(pointer.int_val(0))
    except (OSError, OverflowError, ValueError) as e:
        raise StructuralError('seek to EXIF IFD failed', e) from e
    exif_dir, _ = decode_dir(f, tiff.endian, tiff.is_big)
    return exif_dir.find(MAKER_NOTE_TAG)


__all__ = [
    'MakerNoteParser',
    'MakerNoteRegistry',
    'NikonV3Parser',
    'NIKON_V3',
    'default_registry',
    'locate_maker_note',
]
