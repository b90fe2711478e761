from __future__ import annotations

from narrative_engine.models.character import AbilityScores, CharacterProjection
from narrative_engine.models.combat import CombatParticipant, CombatPhase, CombatSession, RollRecord
from narrative_engine.models.loot import LootCategory, LootItem
from narrative_engine.models.signals import CombatSignal, EntityMention, MentionSource
from narrative_engine.models.skill_check import CheckKind, CheckNotation, CheckResult, SkillCheckPrompt
from narrative_engine.models.threat import Threat

__all__ = [
    "AbilityScores",
    "CharacterProjection",
    "CheckKind",
    "CheckNotation",
    "CheckResult",
    "CombatParticipant",
    "CombatPhase",
    "CombatSession",
    "CombatSignal",
    "EntityMention",
    "LootCategory",
    "LootItem",
    "MentionSource",
    "RollRecord",
    "SkillCheckPrompt",
    "Threat",
]
