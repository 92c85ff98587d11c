"""
ENTITIES lump tokenizer and classifier.

The entity lump is plain text:

  {
  "classname" "worldspawn"
  "message" "The Edge"
  }
  {
  "classname" "weapon_railgun"
  "origin" "128 -64 24"
  }

Pairs are read as one flat stream across the whole lump; braces are not
tracked. Classname counters and first-write-wins metadata do not need entity
boundaries.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

log = logging.getLogger(__name__)

_PAIR_RE = re.compile(r'"([^"]+)"\s*"([^"]*)"')

# Keys whose first value becomes map-wide metadata
MAP_NAME_KEYS    = ('message', 'map', 'mapname')
MAP_VERSION_KEYS = ('mapversion', 'version')

SOUND_KEYS   = ('sound', 'noise', 'snd')
MUSIC_KEYS   = ('music', 'cdtrack', 'wav')
_SOUND_VALUE_RE = re.compile(r'^sound/|\.(wav|ogg|mp3)\Z', re.IGNORECASE)
_MODEL_VALUE_RE = re.compile(r'^models/|\.(md2|sp2|iqm|md3)\Z', re.IGNORECASE)
# Unanchored alternation: starts with "path", contains "file" or "script",
# or ends with "shader".
_OTHER_KEY_RE   = re.compile(r'^path|file|script|shader\Z', re.IGNORECASE)

SPAWN_POINT_CLASSES = {
    'info_player_deathmatch':   'deathmatch',
    'info_player_start':        'start',
    'info_player_coop':         'coop',
    'info_player_intermission': 'intermission',
}

TRACKED_ITEMS = frozenset((
    'item_health',
    'item_health_large',
    'item_health_mega',
    'item_quad',
    'item_invulnerability',
    'item_adrenaline',
    'item_bandolier',
    'item_pack',
    'item_power_screen',
    'item_power_shield',
))


@dataclass
class EntityStats:
    weapons: Dict[str, int] = field(default_factory=dict)
    armors: Dict[str, int] = field(default_factory=dict)
    items: Dict[str, int] = field(default_factory=dict)
    spawn_points: Dict[str, int] = field(default_factory=lambda: {
        'deathmatch': 0,
        'start': 0,
        'coop': 0,
        'intermission': 0,
    })

    def to_dict(self) -> dict:
        return {
            'weapons':     dict(self.weapons),
            'armors':      dict(self.armors),
            'items':       dict(self.items),
            'spawnPoints': dict(self.spawn_points),
        }


@dataclass
class EntityAccumulator:
    """Output buckets for one classification pass."""
    skies: set = field(default_factory=set)
    sounds: set = field(default_factory=set)
    models: set = field(default_factory=set)
    others: set = field(default_factory=set)
    stats: EntityStats = field(default_factory=EntityStats)
    map_name: Optional[str] = None
    map_version: Optional[str] = None


def tokenize_entities(text: str) -> List[Tuple[str, str]]:
    """Return every "key" "value" pair in order, keys lowercased."""
    return [(m.group(1).lower(), m.group(2)) for m in _PAIR_RE.finditer(text)]


def _inc(counter: dict, key: str) -> None:
    counter[key] = counter.get(key, 0) + 1


def classify_classname(cls: str, stats: EntityStats) -> None:
    if cls.startswith('weapon_'):
        _inc(stats.weapons, cls)
        return
    if cls.startswith('item_armor_'):
        _inc(stats.armors, cls)
        return
    if cls.startswith('info_player_'):
        slot = SPAWN_POINT_CLASSES.get(cls)
        if slot is not None:
            stats.spawn_points[slot] += 1
        return
    if cls in TRACKED_ITEMS:
        _inc(stats.items, cls)


def _classify_resource(key: str, vv: str, acc: EntityAccumulator) -> None:
    if key == 'sky':
        acc.skies.add(f'env/{vv}*')
    elif key in SOUND_KEYS or key.startswith('sound'):
        if _SOUND_VALUE_RE.search(vv):
            acc.sounds.add(vv)
        else:
            acc.others.add(f'{key}={vv}')
    elif key == 'model':
        if _MODEL_VALUE_RE.search(vv):
            acc.models.add(vv)
        else:
            acc.others.add(f'{key}={vv}')
    elif key in MUSIC_KEYS:
        acc.sounds.add(vv)
    elif key == 'wad':
        acc.others.add(f'wad={vv}')
    elif _OTHER_KEY_RE.search(key):
        acc.others.add(f'{key}={vv}')


def classify_pairs(pairs, acc: EntityAccumulator) -> EntityAccumulator:
    """
    Route each pair into acc in a single left-to-right pass.

    Empty values are skipped. Map name/version keep the first value seen;
    classname values feed the stats counters and nothing else.
    """
    for key, value in pairs:
        if not value:
            continue

        if key in MAP_NAME_KEYS and acc.map_name is None:
            acc.map_name = value
        if key in MAP_VERSION_KEYS and acc.map_version is None:
            acc.map_version = value

        if key == 'classname':
            classify_classname(value.lower(), acc.stats)
            continue

        _classify_resource(key, value.replace('\\', '/'), acc)
    return acc
