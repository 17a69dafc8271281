"""Exception family raised by the TIFF decoder.

Every failure is a ``TiffError`` carrying a message and an optional
underlying cause.  Callers branch on the subclass (or on ``.kind``):

- ``StructuralError``       -- hard, aborts the decode
- ``UnhandledTagTypeError`` -- soft, the tag is skipped
- ``EndOfInputError``       -- soft while walking the IFD chain
- ``RecursiveIFDError``     -- hard, the IFD chain loops
"""

from typing import Optional


class TiffError(Exception):
    """Base error: ``tiff: <message>[: <cause>]``."""

    kind = 'structural'

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return f'tiff: {self.message}'
        return f'tiff: {self.message}: {self.cause}'


class StructuralError(TiffError):
    """Malformed container: bad magic, bad marker, unreadable field."""
    kind = 'structural'


class UnhandledTagTypeError(TiffError):
    """Tag type code outside the known TIFF type table."""
    kind = 'unhandled_type'

    def __init__(self, type_code: int):
        super().__init__(f'unhandled tag type {type_code}')
        self.type_code = type_code


class EndOfInputError(TiffError):
    """Stream ended before the first byte of a required field."""
    kind = 'eof'


class RecursiveIFDError(TiffError):
    """An IFD chain pointed back at an IFD already visited."""
    kind = 'recursive_ifd'

    def __init__(self, offset: int):
        super().__init__('recursive IFD')
        self.offset = offset


class TagFormatError(TiffError):
    """Tag value accessed as a format it does not hold."""
    kind = 'format'


class UnexpectedEOF(EOFError):
    """Stream ended part-way through a field."""


def read_error(message: str, cause: BaseException) -> TiffError:
    """Wrap a low-level read failure in the matching ``TiffError`` kind.

    A bare ``EOFError`` (nothing left to read) maps to ``EndOfInputError``;
    everything else, including a partial read, is structural.
    """
    if type(cause) is EOFError:
        return EndOfInputError(message, cause)
    return StructuralError(message, cause)
