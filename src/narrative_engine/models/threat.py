from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from narrative_engine.models.character import AbilityScores
from narrative_engine.models.loot import LootItem


class Threat(BaseModel):
    """A synthesized hostile creature. ``hp`` always stays within [0, max_hp]."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    type_key: Optional[str] = None
    description: str = ""
    hp: int = 1
    max_hp: int = 1
    armor_class: Optional[int] = None
    initiative: Optional[int] = None
    ability_scores: Optional[AbilityScores] = None
    weapons: list[str] = Field(default_factory=list)
    special_attacks: list[str] = Field(default_factory=list)
    spells: list[str] = Field(default_factory=list)
    loot: list[LootItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def _clamp_hp(self) -> "Threat":
        self.max_hp = max(0, self.max_hp)
        self.hp = min(max(0, self.hp), self.max_hp)
        return self
