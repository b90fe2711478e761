from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class CombatSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    starts_combat: bool = False
    ends_combat: bool = False


class MentionSource(str, Enum):
    DICTIONARY = "dictionary"
    FALLBACK = "fallback"


class EntityMention(BaseModel):
    """A candidate hostile creature found in text, with its character span."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_key: Optional[str] = None
    start: int
    end: int
    source: MentionSource = MentionSource.DICTIONARY

    def overlaps(self, other: "EntityMention") -> bool:
        return self.start < other.end and other.start < self.end
