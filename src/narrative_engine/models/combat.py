from __future__ import annotations

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from narrative_engine.mechanics.ability_scores import modifier
from narrative_engine.models.character import AbilityScores, CharacterProjection
from narrative_engine.models.loot import LootItem
from narrative_engine.models.threat import Threat


class CombatPhase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"


class RollRecord(BaseModel):
    purpose: str
    roll: int
    total: int
    success: Optional[bool] = None


class CombatParticipant(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: str = ""
    hp: int = 10
    max_hp: int = 10
    armor_class: Optional[int] = None
    initiative: int = 0
    ability_scores: Optional[AbilityScores] = None
    weapons: list[str] = Field(default_factory=list)
    special_attacks: list[str] = Field(default_factory=list)
    spells: list[str] = Field(default_factory=list)
    loot: list[LootItem] = Field(default_factory=list)
    is_hostile: bool = False
    is_active: bool = False
    conditions: list[str] = Field(default_factory=list)
    last_roll_result: Optional[RollRecord] = None

    @classmethod
    def from_threat(cls, threat: Threat) -> CombatParticipant:
        """Adopt a threat by value so later changes to it never leak into the fight."""
        data = threat.model_copy(deep=True)
        return cls(
            id=data.id,
            name=data.name,
            description=data.description,
            hp=data.hp,
            max_hp=data.max_hp,
            armor_class=data.armor_class,
            initiative=data.initiative or 0,
            ability_scores=data.ability_scores,
            weapons=data.weapons,
            special_attacks=data.special_attacks,
            spells=data.spells,
            loot=data.loot,
            is_hostile=True,
        )

    @classmethod
    def from_character(
        cls, character: CharacterProjection, initiative: int, is_active: bool = False,
    ) -> CombatParticipant:
        scores = character.ability_scores.model_copy()
        max_hp = max(1, character.max_hp)
        hp = character.hp if character.hp is not None else max_hp
        ac = character.armor_class
        if ac is None:
            ac = 10 + modifier(scores.dexterity)
        return cls(
            id=character.id,
            name=character.name,
            hp=min(max(0, hp), max_hp),
            max_hp=max_hp,
            armor_class=ac,
            initiative=initiative,
            ability_scores=scores,
            is_hostile=False,
            is_active=is_active,
        )


class CombatSession(BaseModel):
    in_combat: bool = False
    round: int = Field(default=1, ge=1)
    turn_index: int = 0
    # Total turns taken since combat started, across rounds.
    turn_count: int = 0
    participants: list[CombatParticipant] = Field(default_factory=list)
    accumulated_loot: list[LootItem] = Field(default_factory=list)
