"""
Q2 BSP header and lump directory.

Layout (little-endian):
  0   4 bytes  magic   = "IBSP"
  4   int32    version = 38
  8   19 × (int32 offset, int32 length)
"""
import logging
import struct
from typing import NamedTuple, Optional

log = logging.getLogger(__name__)

BSP_MAGIC   = b'IBSP'
BSP_VERSION = 38
HEADER_SIZE = 8
LUMP_ENTRY_SIZE = 8

# Lump indices
LUMP_ENTITIES = 0
LUMP_TEXINFO  = 5
NUM_LUMPS     = 19


class BSPHeaderError(ValueError):
    """Buffer is too small to hold a BSP header."""


class Lump(NamedTuple):
    offset: int
    length: int


def read_header(data: bytes) -> tuple:
    """Return (magic, version). Raises BSPHeaderError on short buffers."""
    if len(data) < HEADER_SIZE:
        raise BSPHeaderError('file too small for a BSP header')
    magic = bytes(data[:4])
    version = struct.unpack_from('<i', data, 4)[0]
    return magic, version


def read_lump_table(data: bytes, errors: list) -> list:
    """
    Read up to NUM_LUMPS directory entries starting right after the header.

    Offsets and lengths are not validated here; see checked_lump().
    A truncated table appends to `errors` and returns what was read.
    """
    lumps = []
    off = HEADER_SIZE
    for _ in range(NUM_LUMPS):
        if off + LUMP_ENTRY_SIZE > len(data):
            errors.append('unexpected end of file in lump table')
            break
        lumps.append(Lump(*struct.unpack_from('<ii', data, off)))
        off += LUMP_ENTRY_SIZE
    log.debug('read %d lump entries', len(lumps))
    return lumps


def checked_lump(data: bytes, lumps: list, index: int) -> Optional[Lump]:
    """Return the directory entry if it points at a non-empty range inside data."""
    if index >= len(lumps):
        return None
    lump = lumps[index]
    if lump.offset < 0 or lump.length <= 0:
        return None
    if lump.offset + lump.length > len(data):
        return None
    return lump
