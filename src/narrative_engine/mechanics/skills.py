"""Skill table and proficiency math: pure functions, no I/O."""
from __future__ import annotations

import math
import re

from narrative_engine.mechanics.ability_scores import ABILITY_NAMES

SKILL_ABILITY_MAP: dict[str, str] = {
    "acrobatics": "dexterity",
    "animal_handling": "wisdom",
    "arcana": "intelligence",
    "athletics": "strength",
    "deception": "charisma",
    "history": "intelligence",
    "insight": "wisdom",
    "intimidation": "charisma",
    "investigation": "intelligence",
    "medicine": "wisdom",
    "nature": "intelligence",
    "perception": "wisdom",
    "performance": "charisma",
    "persuasion": "charisma",
    "religion": "intelligence",
    "sleight_of_hand": "dexterity",
    "stealth": "dexterity",
    "survival": "wisdom",
}

DEFAULT_PROFICIENCY_BONUS = 2


def canonical_check_name(raw: str) -> str | None:
    """Normalize 'Sleight of Hand' to 'sleight_of_hand'.

    Returns None unless the result is a known skill or ability.
    """
    key = re.sub(r"[\s_-]+", "_", raw.strip().lower())
    if key in SKILL_ABILITY_MAP or key in ABILITY_NAMES:
        return key
    return None


def is_ability(name: str) -> bool:
    return name in ABILITY_NAMES


def governing_ability(skill: str) -> str | None:
    return SKILL_ABILITY_MAP.get(skill)


def proficiency_bonus(level: int | None) -> int:
    """ceil(1 + level/4); +2 when the level is unknown."""
    if not level or level < 1:
        return DEFAULT_PROFICIENCY_BONUS
    return math.ceil(1 + level / 4)


def display_name(name: str) -> str:
    """'sleight_of_hand' -> 'Sleight of Hand'."""
    words = name.split("_")
    return " ".join(w if w == "of" else w.capitalize() for w in words)
