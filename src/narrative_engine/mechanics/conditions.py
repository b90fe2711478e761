"""Status conditions: pure data, no I/O."""
from __future__ import annotations

from enum import Enum


class Condition(str, Enum):
    BLINDED = "blinded"
    CHARMED = "charmed"
    DEAFENED = "deafened"
    FRIGHTENED = "frightened"
    GRAPPLED = "grappled"
    INCAPACITATED = "incapacitated"
    INVISIBLE = "invisible"
    PARALYZED = "paralyzed"
    PETRIFIED = "petrified"
    POISONED = "poisoned"
    PRONE = "prone"
    RESTRAINED = "restrained"
    STUNNED = "stunned"
    UNCONSCIOUS = "unconscious"


# Conditions under which a creature cannot take actions on its turn.
INCAPACITATING = frozenset({
    Condition.INCAPACITATED.value,
    Condition.PARALYZED.value,
    Condition.PETRIFIED.value,
    Condition.STUNNED.value,
    Condition.UNCONSCIOUS.value,
})


def normalize_condition(condition: str) -> str:
    """Lower-case, single-spaced form. Custom conditions ('hexed') pass through."""
    return " ".join(condition.strip().lower().split())


def is_incapacitated(conditions: list[str]) -> bool:
    """Check if any condition stops the creature from acting."""
    return any(normalize_condition(c) in INCAPACITATING for c in conditions)
