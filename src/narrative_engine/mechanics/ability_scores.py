"""Ability score math: pure functions, no I/O."""
from __future__ import annotations

ABILITY_NAMES = ["strength", "dexterity", "constitution", "intelligence", "wisdom", "charisma"]

ABILITY_ABBREVIATIONS: dict[str, str] = {
    "str": "strength",
    "dex": "dexterity",
    "con": "constitution",
    "int": "intelligence",
    "wis": "wisdom",
    "cha": "charisma",
}

DEFAULT_SCORE = 10


def modifier(score: int) -> int:
    """Calculate ability modifier from score."""
    return (score - 10) // 2


def expand_ability(name: str) -> str | None:
    """Map 'Wis', 'wisdom' or 'WISDOM' to the full lower-case ability name."""
    key = name.strip().lower()
    if key in ABILITY_NAMES:
        return key
    return ABILITY_ABBREVIATIONS.get(key)
