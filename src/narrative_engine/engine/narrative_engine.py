"""Drives the detection pipeline one narrative fragment at a time."""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, Field

from narrative_engine.config import EngineOptions
from narrative_engine.detection.extractor import EntityExtractor
from narrative_engine.detection.scanner import TextSignalScanner
from narrative_engine.engine.combat_state import CombatStateMachine
from narrative_engine.generation.generator import ProceduralGenerator
from narrative_engine.mechanics.ability_scores import modifier
from narrative_engine.mechanics.dice import roll_d20
from narrative_engine.mechanics.rng import RandomSource, default_source
from narrative_engine.models.character import CharacterProjection
from narrative_engine.models.combat import CombatParticipant, CombatSession
from narrative_engine.models.loot import LootItem
from narrative_engine.models.signals import CombatSignal, EntityMention, MentionSource
from narrative_engine.models.skill_check import CheckResult, SkillCheckPrompt
from narrative_engine.models.threat import Threat
from narrative_engine.resolution.skill_checks import SkillCheckResolver

logger = logging.getLogger(__name__)


class FragmentOutcome(BaseModel):
    signal: CombatSignal = Field(default_factory=CombatSignal)
    skill_checks: list[SkillCheckPrompt] = Field(default_factory=list)
    mentions: list[EntityMention] = Field(default_factory=list)
    threats: list[Threat] = Field(default_factory=list)
    combat_started: bool = False
    combat_ended: bool = False
    loot: list[LootItem] = Field(default_factory=list)
    resolutions: list[CheckResult] = Field(default_factory=list)


class NarrativeEngine:
    """One engine per session. Fragments must be fed in delivery order.

    Start takes precedence only when idle and end only while in combat, so a
    single fragment never both opens and closes a fight.
    """

    def __init__(
        self,
        options: EngineOptions | None = None,
        rng: RandomSource | None = None,
        party: list[CharacterProjection] | None = None,
        active_character_id: str | None = None,
    ) -> None:
        self.options = options or EngineOptions()
        self.rng = rng if rng is not None else default_source()
        self.scanner = TextSignalScanner(self.options.supports_bracket_notation)
        self.extractor = EntityExtractor()
        self.generator = ProceduralGenerator(self.rng)
        self.resolver = SkillCheckResolver(self.rng)
        self.combat = CombatStateMachine()
        self.party: list[CharacterProjection] = list(party or [])
        self.active_character_id = active_character_id

    @property
    def session(self) -> CombatSession:
        return self.combat.snapshot()

    def set_party(self, characters: list[CharacterProjection], active_id: str | None = None) -> None:
        self.party = list(characters)
        self.active_character_id = active_id

    @property
    def active_character(self) -> Optional[CharacterProjection]:
        for c in self.party:
            if c.id == self.active_character_id:
                return c
        return self.party[0] if self.party else None

    def process(self, text: str) -> FragmentOutcome:
        outcome = FragmentOutcome()
        if not text:
            return outcome

        outcome.signal = self.scanner.classify(text)

        if not self.combat.in_combat and outcome.signal.starts_combat:
            outcome.mentions = self._hostile_mentions(text)
            outcome.threats = [
                self.generator.synthesize_threat(m.type_key or m.name) for m in outcome.mentions
            ]
            self.combat.initialize(self._participants(outcome.threats))
            outcome.combat_started = True
        elif self.combat.in_combat and outcome.signal.ends_combat:
            self.combat.add_loot(self.generator.extract_loot_from_text(text))
            self.combat.collect_defeated_loot()
            outcome.loot = self.combat.end()
            outcome.combat_ended = True

        outcome.skill_checks = self.scanner.find_skill_checks(text)
        if self.options.auto_resolve:
            character = self.active_character
            outcome.resolutions = [
                self.resolve_skill_check(prompt, character) for prompt in outcome.skill_checks
            ]
        return outcome

    def resolve_skill_check(
        self, prompt: SkillCheckPrompt, character: CharacterProjection | None = None,
    ) -> CheckResult:
        result = self.resolver.resolve(prompt, character)
        participant_id = character.id if character else None
        if participant_id and self.combat.in_combat:
            self.combat.record_roll(
                participant_id, f"{prompt.skill_or_ability} check", result.roll,
                result.total, result.success,
            )
        if self.options.auto_resolve and self.options.on_resolved is not None:
            try:
                self.options.on_resolved(result)
            except Exception as e:
                logger.warning(f"Post-check notification failed: {e}")
        return result

    def end_combat(self) -> list[LootItem]:
        self.combat.collect_defeated_loot()
        return self.combat.end()

    def _hostile_mentions(self, text: str) -> list[EntityMention]:
        """Fallback guesses that name a party member are the party, not the enemy."""
        party_names = {c.name.strip().lower() for c in self.party}
        return [
            m for m in self.extractor.find_mentions(text)
            if not (m.source == MentionSource.FALLBACK and m.name.strip().lower() in party_names)
        ]

    def _participants(self, threats: list[Threat]) -> list[CombatParticipant]:
        participants: list[CombatParticipant] = []
        for character in self.party:
            dex_mod = modifier(character.ability_scores.dexterity)
            initiative = roll_d20(dex_mod, self.rng).total
            participants.append(CombatParticipant.from_character(
                character, initiative, is_active=character.id == self.active_character_id,
            ))
        participants.extend(CombatParticipant.from_threat(t) for t in threats)
        return participants
