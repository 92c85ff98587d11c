"""
TEXINFO lump decoder.

dtexinfo_t is 76 bytes:
  vecs[2][4]   32 bytes  (float32)
  flags         4 bytes
  value         4 bytes
  texture      32 bytes  char[32], NUL-padded   <- the only field used here
  nexttexinfo   4 bytes
"""
import logging
import re

log = logging.getLogger(__name__)

DTEXINFO_SIZE      = 76
TEXINFO_NAME_OFFSET = 40   # 32 (vecs) + 4 (flags) + 4 (value)
TEXINFO_NAME_SIZE  = 32

_TEXTURES_PREFIX_RE = re.compile(r'^textures[\\/]+', re.IGNORECASE)


def read_cstring(data: bytes, start: int, max_len: int) -> str:
    """Read a NUL-terminated ASCII string of at most max_len bytes, trimmed."""
    end = min(start + max_len, len(data))
    raw = bytes(data[start:end])
    nul = raw.find(b'\x00')
    if nul != -1:
        raw = raw[:nul]
    return raw.decode('latin-1').replace('\x00', '').strip()


def normalize_texture_name(name: str) -> str:
    """
    Map a texinfo name to the asset path the engine loads.

    'e1u1/wall01' and 'textures\\e1u1\\wall01' both become
    'textures/e1u1/wall01.wal'. The .wal suffix is added even when the
    stored name already carries an extension.
    """
    normalized = _TEXTURES_PREFIX_RE.sub('', name).replace('\\', '/')
    return f'textures/{normalized}.wal'


def decode_texinfo(data: bytes, offset: int, length: int) -> set:
    """Return the set of texture paths referenced by a TEXINFO lump."""
    textures = set()
    count = length // DTEXINFO_SIZE
    for i in range(count):
        base = offset + i * DTEXINFO_SIZE
        name = read_cstring(data, base + TEXINFO_NAME_OFFSET, TEXINFO_NAME_SIZE)
        if name:
            textures.add(normalize_texture_name(name))
    log.debug('texinfo: %d records, %d unique textures', count, len(textures))
    return textures
