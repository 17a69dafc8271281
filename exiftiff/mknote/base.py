"""Abstract base class for vendor maker-note parsers."""

from abc import ABC, abstractmethod
from typing import Optional

from exiftiff.config import DecoderConfig
from exiftiff.tiff import Tag, Tiff


class MakerNoteParser(ABC):
    """Base class for all vendor maker-note parsers.

    Each parser pairs a signature check on the raw maker-note bytes with a
    sub-decoder for that vendor's layout.
    """

    name: str = ''

    @abstractmethod
    def has_valid_value(self, val: Optional[bytes]) -> bool:
        """Check whether raw maker-note bytes carry this vendor's signature.

        Must look at the bytes only and must accept ``None``.
        """
        ...

    @abstractmethod
    def parse(self, tag: Tag, config: Optional[DecoderConfig] = None) -> Tiff:
        """Decode the vendor structure inside a maker-note tag."""
        ...

    def claims(self, tag: Tag) -> bool:
        return self.has_valid_value(tag.val)
