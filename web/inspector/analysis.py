"""
Q2 BSP version 38 resource inspector.

Collects the textures, skies, sounds and models a map references, plus
entity counts and the map's declared name/version. Nothing but the header,
the lump directory, TEXINFO and ENTITIES is read.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .entities import EntityAccumulator, EntityStats, classify_pairs, tokenize_entities
from .lumps import (
    BSP_MAGIC, BSP_VERSION, LUMP_ENTITIES, LUMP_TEXINFO,
    checked_lump, read_header, read_lump_table,
)
from .texinfo import decode_texinfo

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    map_name: Optional[str] = None
    map_version: Optional[str] = None
    textures: Tuple[str, ...] = ()
    skies: Tuple[str, ...] = ()
    sounds: Tuple[str, ...] = ()
    models: Tuple[str, ...] = ()
    others: Tuple[str, ...] = ()
    entity_stats: EntityStats = field(default_factory=EntityStats)

    def to_dict(self) -> dict:
        """JSON-ready view with the camelCase keys the web layer returns."""
        return {
            'errors':      list(self.errors),
            'warnings':    list(self.warnings),
            'mapName':     self.map_name,
            'mapVersion':  self.map_version,
            'textures':    list(self.textures),
            'skies':       list(self.skies),
            'sounds':      list(self.sounds),
            'models':      list(self.models),
            'others':      list(self.others),
            'entityStats': self.entity_stats.to_dict(),
        }


def load_bsp(path: str) -> AnalysisResult:
    with open(path, 'rb') as f:
        data = f.read()
    return analyze(data)


def analyze(data: bytes) -> AnalysisResult:
    """
    Inspect a BSP buffer.

    Raises BSPHeaderError only when the buffer cannot hold the 8-byte header.
    Every other problem (bad magic, wrong version, truncated directory,
    missing or out-of-range lumps) is reported in errors/warnings and the
    remaining data is still parsed.
    """
    errors: list = []
    warnings: list = []

    magic, version = read_header(data)
    if magic != BSP_MAGIC:
        errors.append(
            f'bad signature: expected "{BSP_MAGIC.decode()}", '
            f'got "{magic.decode("latin-1")}"'
        )
    if version != BSP_VERSION:
        warnings.append(
            f'BSP version {version}, expected {BSP_VERSION} (Quake 2); continuing anyway'
        )

    lumps = read_lump_table(data, errors)
    acc = EntityAccumulator()

    # --- Entity string (lump 0) ---
    ent = checked_lump(data, lumps, LUMP_ENTITIES)
    if ent is not None:
        text = data[ent.offset:ent.offset + ent.length].decode('latin-1')
        pairs = tokenize_entities(text)
        log.debug('entities: %d key/value pairs', len(pairs))
        classify_pairs(pairs, acc)
    else:
        warnings.append('ENTITIES lump missing or corrupt')

    # --- Texture info (lump 5) ---
    tix = checked_lump(data, lumps, LUMP_TEXINFO)
    if tix is not None:
        textures = decode_texinfo(data, tix.offset, tix.length)
    else:
        textures = set()
        warnings.append('TEXINFO lump missing or corrupt — textures may not be found')

    return AnalysisResult(
        errors=tuple(errors),
        warnings=tuple(warnings),
        map_name=acc.map_name,
        map_version=acc.map_version,
        textures=tuple(sorted(textures)),
        skies=tuple(sorted(acc.skies)),
        sounds=tuple(sorted(acc.sounds)),
        models=tuple(sorted(acc.models)),
        others=tuple(sorted(acc.others)),
        entity_stats=acc.stats,
    )
