"""Default Kanji Set — fallback records served when the collection is empty.

Invariants:
    - DEFAULT_KANJI holds exactly ten records, unique by character
    - pick_default_kanji never returns more items than the set holds
    - Pure functions: randomness injected via rng parameter for tests

Design Decisions:
    - Hardcoded tuple over a seed file: the set is part of the API contract,
      not data (ADR: no runtime file dependency)
"""

import random

DEFAULT_KANJI: tuple[dict[str, str], ...] = (
    {"character": "日", "onyomi": "ニチ、ジツ", "kunyomi": "ひ、か", "meaning": "day, sun"},
    {"character": "月", "onyomi": "ゲツ、ガツ", "kunyomi": "つき", "meaning": "month, moon"},
    {"character": "火", "onyomi": "カ", "kunyomi": "ひ", "meaning": "fire"},
    {"character": "水", "onyomi": "スイ", "kunyomi": "みず", "meaning": "water"},
    {"character": "木", "onyomi": "ボク、モク", "kunyomi": "き", "meaning": "tree, wood"},
    {"character": "金", "onyomi": "キン、コン", "kunyomi": "かね", "meaning": "gold, money"},
    {"character": "土", "onyomi": "ド、ト", "kunyomi": "つち", "meaning": "earth, soil"},
    {"character": "山", "onyomi": "サン", "kunyomi": "やま", "meaning": "mountain"},
    {"character": "川", "onyomi": "セン", "kunyomi": "かわ", "meaning": "river"},
    {"character": "人", "onyomi": "ジン、ニン", "kunyomi": "ひと", "meaning": "person"},
)


def pick_default_kanji(
    limit: int, rng: random.Random | None = None,
) -> list[dict[str, str]]:
    """Shuffle the default set and return its first min(limit, 10) records."""
    rng = rng or random.Random()
    pool = [dict(k) for k in DEFAULT_KANJI]
    rng.shuffle(pool)
    return pool[:limit]


def sample_size(limit: int, collection_size: int) -> int:
    """Number of stored records to sample — never more than exist."""
    return max(0, min(limit, collection_size))
