"""Shared test fixtures — synthetic TIFF/BigTIFF/EXIF byte generators."""

import struct
import pytest


# struct format used to pack an int value into the inline slot, per type code
_INLINE_FORMATS = {
    1: 'B', 3: 'H', 4: 'I', 6: 'b', 8: 'h', 9: 'i', 11: 'f',
    13: 'I', 16: 'Q', 17: 'q', 18: 'Q',
}


def _layout(is_big):
    """(count_fmt, entry_size, slot_size, offset_fmt) for the variant."""
    if is_big:
        return 'Q', 20, 8, 'Q'
    return 'H', 12, 4, 'I'


def ifd_size(entries, is_big=False):
    """Bytes taken by an IFD plus its out-of-line data."""
    count_fmt, entry_size, slot, off_fmt = _layout(is_big)
    ool = sum(len(v) for _, _, _, v in entries
              if isinstance(v, bytes) and len(v) > slot)
    return (struct.calcsize(count_fmt) + entry_size * len(entries)
            + struct.calcsize(off_fmt) + ool)


def build_ifd(entries, ifd_start, next_ifd=0, endian='<', is_big=False):
    """Build one IFD followed by its out-of-line value data.

    Args:
        entries: List of (tag_id, type_id, count, value) tuples.
            An int is packed inline using the type's width.
            Bytes that fit the value slot are stored inline (zero padded),
            longer bytes are written after the IFD and referenced by offset.
        ifd_start: Absolute offset the IFD will be written at.
        next_ifd: Value of the next-IFD pointer.
    """
    count_fmt, entry_size, slot, off_fmt = _layout(is_big)
    n = len(entries)
    data_start = (ifd_start + struct.calcsize(count_fmt) + entry_size * n
                  + struct.calcsize(off_fmt))

    ifd_bytes = struct.pack(endian + count_fmt, n)
    data_bytes = b''

    for tag_id, type_id, count, value in entries:
        ifd_bytes += struct.pack(endian + 'HH', tag_id, type_id)
        ifd_bytes += struct.pack(endian + off_fmt, count)
        if isinstance(value, bytes):
            if len(value) > slot:
                ifd_bytes += struct.pack(endian + off_fmt, data_start + len(data_bytes))
                data_bytes += value
            else:
                ifd_bytes += value.ljust(slot, b'\x00')
        else:
            fmt = _INLINE_FORMATS.get(type_id, 'I')
            ifd_bytes += struct.pack(endian + fmt, value).ljust(slot, b'\x00')

    ifd_bytes += struct.pack(endian + off_fmt, next_ifd)
    return ifd_bytes + data_bytes


def tiff_header(first_ifd=8, endian='<'):
    bo = b'II' if endian == '<' else b'MM'
    return bo + struct.pack(endian + 'HI', 42, first_ifd)


def bigtiff_header(first_ifd=16, endian='<'):
    # byte order(2) + magic 43(2) + bytesize 8(2) + reserved(2) + first_ifd_offset(8)
    bo = b'II' if endian == '<' else b'MM'
    return bo + struct.pack(endian + 'HHHQ', 43, 8, 0, first_ifd)


def build_tiff(entries, endian='<', next_ifd=0, extra_data=None):
    """Build a minimal TIFF file in memory with one IFD at offset 8.

    Args:
        entries: List of (tag_id, type_id, count, value) tuples.
        endian: '<' for little-endian, '>' for big-endian.
        next_ifd: Next-IFD pointer written after the entries.
        extra_data: Optional bytes appended at the end of the file.

    Returns:
        bytes: Complete TIFF file content.
    """
    result = tiff_header(8, endian) + build_ifd(entries, 8, next_ifd, endian)
    if extra_data:
        result += extra_data
    return result


def build_tiff_multi_ifd(ifd_entries_list, endian='<', last_next=0):
    """Build a TIFF with multiple linked IFDs.

    Args:
        ifd_entries_list: List of lists, each inner list contains
            (tag_id, type_id, count, value) tuples for one IFD.
        endian: '<' or '>'.
        last_next: Next-IFD pointer of the final IFD (0 ends the chain).

    Returns:
        bytes: Complete TIFF file with chained IFDs.
    """
    return _build_chain(ifd_entries_list, endian, last_next, is_big=False)


def build_bigtiff(entries, endian='<', next_ifd=0):
    """Build a minimal BigTIFF file with one IFD at offset 16."""
    return bigtiff_header(16, endian) + build_ifd(entries, 16, next_ifd, endian, is_big=True)


def build_bigtiff_multi_ifd(ifd_entries_list, endian='<', last_next=0):
    """Build a BigTIFF with multiple linked IFDs."""
    return _build_chain(ifd_entries_list, endian, last_next, is_big=True)


def _build_chain(ifd_entries_list, endian, last_next, is_big):
    header_size = 16 if is_big else 8

    ifd_starts = []
    offset = header_size
    for entries in ifd_entries_list:
        ifd_starts.append(offset)
        offset += ifd_size(entries, is_big)

    if is_big:
        result = bigtiff_header(ifd_starts[0], endian)
    else:
        result = tiff_header(ifd_starts[0], endian)

    for i, entries in enumerate(ifd_entries_list):
        if i + 1 < len(ifd_entries_list):
            next_ifd = ifd_starts[i + 1]
        else:
            next_ifd = last_next
        result += build_ifd(entries, ifd_starts[i], next_ifd, endian, is_big)

    return result


def build_exif_tiff(main_entries, exif_entries, endian='<'):
    """Build a TIFF whose IFD0 points (tag 34665) at an EXIF sub-IFD.

    The sub-IFD is not part of the IFD chain; it sits after IFD0's data.
    """
    pointer = (34665, 4, 1, 0)
    main_size = ifd_size(main_entries + [pointer])
    exif_offset = 8 + main_size
    main = build_ifd(main_entries + [(34665, 4, 1, exif_offset)], 8, 0, endian)
    exif = build_ifd(exif_entries, exif_offset, 0, endian)
    return tiff_header(8, endian) + main + exif


def build_nikon_maker_note(entries, endian='<'):
    """Nikon type 3 maker note: signature, version, padding, embedded TIFF."""
    return b'Nikon\x00\x02\x10\x00\x00' + build_tiff(entries, endian)


# ---------------------------------------------------------------------------
# File fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def camera_tiff_bytes():
    """Two-IFD TIFF resembling a camera file: IFD0 metadata plus a thumbnail IFD."""
    make = b'NIKON CORPORATION\x00'
    model = b'NIKON D750\x00'
    xres = struct.pack('<II', 300, 1)
    ifd0 = [
        (256, 3, 1, 6016),             # ImageWidth
        (257, 3, 1, 4016),             # ImageLength
        (271, 2, len(make), make),     # Make
        (272, 2, len(model), model),   # Model
        (282, 5, 1, xres),             # XResolution
        (296, 3, 1, 2),                # ResolutionUnit
    ]
    ifd1 = [
        (259, 3, 1, 6),                # Compression (JPEG)
        (513, 4, 1, 4096),             # JPEGInterchangeFormat
        (514, 4, 1, 1024),             # JPEGInterchangeFormatLength
    ]
    return build_tiff_multi_ifd([ifd0, ifd1])


@pytest.fixture
def camera_tiff(tmp_path, camera_tiff_bytes):
    filepath = tmp_path / 'camera.tif'
    filepath.write_bytes(camera_tiff_bytes)
    return filepath


@pytest.fixture
def nikon_exif_bytes():
    """TIFF with an EXIF sub-IFD holding a Nikon type 3 maker note."""
    note = build_nikon_maker_note([
        (1, 7, 4, b'0210'),            # MakerNoteVersion
        (2, 3, 2, b'\x00\x00\x64\x00'),  # ISO
    ])
    make = b'NIKON CORPORATION\x00'
    return build_exif_tiff(
        [(271, 2, len(make), make)],
        [(37500, 7, len(note), note)],
    )


@pytest.fixture
def nikon_exif_tiff(tmp_path, nikon_exif_bytes):
    filepath = tmp_path / 'nikon.tif'
    filepath.write_bytes(nikon_exif_bytes)
    return filepath
