"""Decoded TIFF container model: Tiff -> Dir -> Tag."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from exiftiff.tiff.reader import BIG_ENDIAN
from exiftiff.tiff.tag import Tag


@dataclass(frozen=True)
class Dir:
    """One Image File Directory. Tags keep on-disk order; ids may repeat."""
    tags: Tuple[Tag, ...] = ()

    def find(self, tag_id: int) -> Optional[Tag]:
        """First tag with ``tag_id``, or None."""
        for tag in self.tags:
            if tag.id == tag_id:
                return tag
        return None

    def __str__(self) -> str:
        return 'Dir{' + ''.join(f'{t}, ' for t in self.tags) + '}'


@dataclass(frozen=True)
class Tiff:
    """A decoded TIFF container.

    ``dirs[0]`` is IFD0 and the rest follow the IFD chain.  ``endian`` is
    the struct prefix of the file's byte order ('<' for II, '>' for MM).
    """
    dirs: Tuple[Dir, ...] = field(default_factory=tuple)
    endian: str = '<'
    is_big: bool = False

    @property
    def byte_order(self) -> str:
        return 'big' if self.endian == BIG_ENDIAN else 'little'

    def find_tag(self, tag_id: int) -> Optional[Tag]:
        """First tag with ``tag_id`` across the chain, IFD0 first."""
        for d in self.dirs:
            tag = d.find(tag_id)
            if tag is not None:
                return tag
        return None

    def __str__(self) -> str:
        return 'Tiff{' + ''.join(f'{d}, ' for d in self.dirs) + '}'
