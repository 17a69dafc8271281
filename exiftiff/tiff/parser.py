"""TIFF/BigTIFF container and IFD decoding.

Handles both standard TIFF (magic 42, 32-bit offsets) and BigTIFF (magic 43,
64-bit offsets), with little-endian (II) and big-endian (MM) byte orders.
All offsets are absolute from the first byte of the TIFF header.
"""

import logging
from typing import BinaryIO, Optional, Tuple

from exiftiff.config import DecoderConfig
from exiftiff.errors import (
    EndOfInputError,
    RecursiveIFDError,
    StructuralError,
    UnhandledTagTypeError,
    read_error,
)
from exiftiff.tiff.models import Dir, Tiff
from exiftiff.tiff.reader import (
    BIG_ENDIAN,
    LITTLE_ENDIAN,
    read_exact,
    read_offset,
    unpack,
)
from exiftiff.tiff.tag import decode_tag

logger = logging.getLogger(__name__)

TIFF_MAGIC = 42
BIGTIFF_MAGIC = 43

# BigTIFF header: byte order(2) + magic(2) + bytesize(2) + reserved(2)
BIGTIFF_FIRST_IFD_POINTER = 8

_SEEK_ERRORS = (OSError, OverflowError, ValueError)


def decode_dir(f: BinaryIO, endian: str, is_big: bool = False) -> Tuple[Dir, int]:
    """Decode the IFD at the current stream position.

    Returns (dir, next_ifd_offset).  Tags of unknown type are dropped;
    their records are still consumed so the count stays in step.  The tag
    count is signed; a negative count gives an empty directory.
    """
    try:
        num_tags = unpack(f, endian, 'q' if is_big else 'h')
    except (OSError, EOFError) as e:
        raise read_error('failed to read IFD tag count', e) from e

    tags = []
    for _ in range(max(num_tags, 0)):
        try:
            tags.append(decode_tag(f, endian, is_big))
        except UnhandledTagTypeError as e:
            logger.debug("decode_dir: skipping tag: %s", e)

    try:
        next_offset = read_offset(f, endian, is_big)
    except (OSError, EOFError) as e:
        raise read_error('failed to read offset to next IFD', e) from e

    return Dir(tuple(tags)), next_offset


def _read_header(f: BinaryIO) -> Tuple[str, bool, int]:
    """Validate the header. Returns (endian, is_big, first_ifd_offset)."""
    try:
        bo = read_exact(f, 2)
    except (OSError, EOFError) as e:
        raise StructuralError('could not read tiff byte order', e) from e
    if bo == b'II':
        endian = LITTLE_ENDIAN
    elif bo == b'MM':
        endian = BIG_ENDIAN
    else:
        raise StructuralError('could not read tiff byte order')

    try:
        magic = unpack(f, endian, 'H')
    except (OSError, EOFError) as e:
        raise StructuralError('could not find special tiff marker', e) from e
    if magic not in (TIFF_MAGIC, BIGTIFF_MAGIC):
        raise StructuralError('could not find special tiff marker')

    is_big = magic == BIGTIFF_MAGIC
    if is_big:
        try:
            f.seek(BIGTIFF_FIRST_IFD_POINTER)
        except _SEEK_ERRORS as e:
            raise StructuralError('could not seek to first IFD', e) from e

    try:
        first_offset = read_offset(f, endian, is_big)
    except (OSError, EOFError) as e:
        raise StructuralError('could not read offset to first IFD', e) from e

    return endian, is_big, first_offset


def decode(f: BinaryIO, config: Optional[DecoderConfig] = None) -> Tiff:
    """Decode the TIFF data starting at the first byte of ``f``.

    Walks the IFD chain from the header.  An IFD that runs into the end
    of the stream ends the walk quietly (a dangling last pointer is common
    in the wild); every other failure raises.  No partial result is
    returned on error.
    """
    if config is None:
        config = DecoderConfig.default()

    endian, is_big, offset = _read_header(f)

    dirs = []
    visited = set()
    while offset != 0:
        if config.max_ifds is not None and len(dirs) >= config.max_ifds:
            raise StructuralError(
                f'IFD chain longer than {config.max_ifds} directories')

        if offset < 0:
            raise StructuralError('seek to IFD failed', ValueError(f'negative offset {offset}'))
        try:
            f.seek(offset)
        except _SEEK_ERRORS as e:
            raise StructuralError('seek to IFD failed', e) from e

        try:
            d, next_offset = decode_dir(f, endian, is_big)
        except EndOfInputError as e:
            logger.debug("decode: IFD at offset %d is past end of input, skipping: %s",
                         offset, e)
            break

        if config.cycle_guard == 'visited':
            visited.add(offset)
            if next_offset in visited:
                raise RecursiveIFDError(next_offset)
        elif next_offset == offset:
            raise RecursiveIFDError(next_offset)

        dirs.append(d)
        offset = next_offset

    return Tiff(tuple(dirs), endian, is_big)
