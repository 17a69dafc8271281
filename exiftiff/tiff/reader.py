"""Exact-length and positional reads against a seekable binary stream."""

import struct
from typing import BinaryIO

from exiftiff.errors import UnexpectedEOF

# Reads larger than this are pulled in pieces, never allocated up front.
CHUNK_SIZE = 65536

LITTLE_ENDIAN = '<'
BIG_ENDIAN = '>'


def offset_format(is_big: bool, signed: bool = False) -> str:
    """struct format char of a file offset: 8 bytes BigTIFF, 4 bytes classic."""
    fmt = 'Q' if is_big else 'I'
    return fmt.lower() if signed else fmt


def read_exact(f: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes.

    Raises ``EOFError`` when nothing at all is left, ``UnexpectedEOF``
    when the stream ends part-way through.
    """
    if size <= CHUNK_SIZE:
        data = f.read(size)
    else:
        parts = []
        remaining = size
        while remaining > 0:
            chunk = f.read(min(CHUNK_SIZE, remaining))
            if not chunk:
                break
            parts.append(chunk)
            remaining -= len(chunk)
        data = b''.join(parts)

    if len(data) == size:
        return data
    if not data:
        raise EOFError('EOF')
    raise UnexpectedEOF(f'unexpected EOF: wanted {size} bytes, got {len(data)}')


def read_at(f: BinaryIO, offset: int, size: int) -> bytes:
    """Read ``size`` bytes at absolute ``offset`` without moving the stream."""
    pos = f.tell()
    try:
        f.seek(offset)
        return read_exact(f, size)
    finally:
        f.seek(pos)


def unpack(f: BinaryIO, endian: str, fmt: str):
    """Read and unpack a single struct value."""
    size = struct.calcsize(endian + fmt)
    return struct.unpack(endian + fmt, read_exact(f, size))[0]


def read_offset(f: BinaryIO, endian: str, is_big: bool) -> int:
    """Read an IFD pointer at the current position and advance past it.

    IFD pointers are signed; a negative one is rejected when followed.
    """
    return unpack(f, endian, offset_format(is_big, signed=True))


class SectionReader:
    """View of ``f`` in which byte ``base`` of the file is position 0.

    Lets a TIFF block embedded in a larger file (a JPEG APP1 segment, a
    maker note) be decoded with offsets relative to its own header.
    """

    def __init__(self, f: BinaryIO, base: int = 0):
        self._f = f
        self._base = base
        f.seek(base)

    def read(self, size: int = -1) -> bytes:
        return self._f.read(size)

    def seek(self, offset: int, whence: int = 0) -> int:
        if whence == 0:
            offset += self._base
        return self._f.seek(offset, whence) - self._base

    def tell(self) -> int:
        return self._f.tell() - self._base
