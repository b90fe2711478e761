from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AbilityScores(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    def score(self, ability: str) -> int:
        return getattr(self, ability, 10)


class CharacterProjection(BaseModel):
    """The slice of a character record the engine consumes.

    Only ``ability_scores`` and ``level`` drive skill checks; the rest seeds a
    combat participant. Every field is optional so partial records degrade to
    defaults instead of failing.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = "Adventurer"
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)
    level: Optional[int] = None
    hp: Optional[int] = None
    max_hp: int = 10
    armor_class: Optional[int] = None
