"""Round and turn bookkeeping for an active encounter.

Every operation is total: unknown participant ids, non-positive amounts and
calls made while idle are ignored instead of raising, because the machine is
driven by best-effort text classification.
"""
from __future__ import annotations

import logging
from typing import Optional

from narrative_engine.mechanics.conditions import normalize_condition
from narrative_engine.models.combat import CombatParticipant, CombatPhase, CombatSession, RollRecord
from narrative_engine.models.loot import LootItem

logger = logging.getLogger(__name__)


class CombatStateMachine:
    def __init__(self) -> None:
        self._session = CombatSession()

    @property
    def phase(self) -> CombatPhase:
        return CombatPhase.ACTIVE if self._session.in_combat else CombatPhase.IDLE

    @property
    def in_combat(self) -> bool:
        return self._session.in_combat

    @property
    def round(self) -> int:
        return self._session.round

    @property
    def turn_index(self) -> int:
        return self._session.turn_index

    @property
    def participants(self) -> list[CombatParticipant]:
        return self._session.participants

    @property
    def accumulated_loot(self) -> list[LootItem]:
        return list(self._session.accumulated_loot)

    @property
    def active_participant(self) -> CombatParticipant | None:
        for p in self._session.participants:
            if p.is_active:
                return p
        return None

    def snapshot(self) -> CombatSession:
        return self._session.model_copy(deep=True)

    # -- Lifecycle --

    def initialize(self, participants: list[CombatParticipant]) -> None:
        """Order by initiative (highest first, ties keep input order) and start round 1."""
        ordered = sorted(
            (p.model_copy(deep=True) for p in participants),
            key=lambda p: p.initiative,
            reverse=True,
        )
        active_index = next((i for i, p in enumerate(ordered) if p.is_active), 0)
        for i, p in enumerate(ordered):
            p.is_active = i == active_index
        self._session = CombatSession(
            in_combat=True,
            round=1,
            turn_index=active_index if ordered else 0,
            turn_count=0,
            participants=ordered,
        )
        logger.info("Combat started with %d participants", len(ordered))

    def end(self) -> list[LootItem]:
        """Return to idle. Hands back whatever loot was accumulated."""
        loot = list(self._session.accumulated_loot)
        if self._session.in_combat:
            logger.info("Combat ended after %d rounds", self._session.round)
        self._session = CombatSession()
        return loot

    # -- Turn order --

    def next_turn(self) -> None:
        session = self._session
        if not session.in_combat or not session.participants:
            return
        next_index = session.turn_index + 1
        if next_index >= len(session.participants):
            next_index = 0
            session.round += 1
        session.turn_index = next_index
        session.turn_count += 1
        for i, p in enumerate(session.participants):
            p.is_active = i == next_index

    def add_participant(self, participant: CombatParticipant) -> None:
        """Join an ongoing fight at the end of the order."""
        if not self._session.in_combat:
            return
        joined = participant.model_copy(deep=True)
        joined.is_active = not self._session.participants
        self._session.participants.append(joined)

    # -- Participant mutation --

    def _find(self, participant_id: str) -> Optional[CombatParticipant]:
        for p in self._session.participants:
            if p.id == participant_id:
                return p
        return None

    def apply_damage(self, participant_id: str, amount: int) -> None:
        target = self._find(participant_id)
        if target is None or amount <= 0:
            return
        target.hp = min(target.max_hp, max(0, target.hp - amount))

    def apply_healing(self, participant_id: str, amount: int) -> None:
        target = self._find(participant_id)
        if target is None or amount <= 0:
            return
        target.hp = min(target.max_hp, max(0, target.hp + amount))

    def add_condition(self, participant_id: str, condition: str) -> None:
        target = self._find(participant_id)
        name = normalize_condition(condition)
        if target is None or not name or name in target.conditions:
            return
        target.conditions.append(name)

    def remove_condition(self, participant_id: str, condition: str) -> None:
        target = self._find(participant_id)
        if target is None:
            return
        name = normalize_condition(condition)
        target.conditions = [c for c in target.conditions if c != name]

    def record_roll(
        self,
        participant_id: str,
        purpose: str,
        roll: int,
        total: int | None = None,
        success: bool | None = None,
    ) -> None:
        target = self._find(participant_id)
        if target is None:
            return
        target.last_roll_result = RollRecord(
            purpose=purpose,
            roll=roll,
            total=roll if total is None else total,
            success=success,
        )

    # -- Loot --

    def add_loot(self, items: list[LootItem]) -> None:
        self._session.accumulated_loot.extend(item.model_copy() for item in items)

    def collect_defeated_loot(self) -> list[LootItem]:
        """Move the speculative loot of downed hostiles into the accumulated pile."""
        collected: list[LootItem] = []
        for p in self._session.participants:
            if p.is_hostile and p.hp == 0 and p.loot:
                collected.extend(p.loot)
                p.loot = []
        self.add_loot(collected)
        return collected
