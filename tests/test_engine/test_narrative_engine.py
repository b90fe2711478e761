"""Tests for src/narrative_engine/engine/narrative_engine.py."""
from __future__ import annotations

import pytest

from narrative_engine.config import EngineOptions
from narrative_engine.engine.narrative_engine import FragmentOutcome, NarrativeEngine
from narrative_engine.models.loot import LootCategory
from narrative_engine.models.skill_check import SkillCheckPrompt

START = "Roll for initiative! A goblin attacks you."
END = "The battle is over and you loot the fallen. You find 20 gold pieces."


class TestCombatLifecycle:
    def test_start_synthesizes_threats(self, seeded_rng):
        engine = NarrativeEngine(rng=seeded_rng)
        outcome = engine.process(START)
        assert outcome.combat_started is True
        assert [m.type_key for m in outcome.mentions] == ["goblin"]
        assert len(outcome.threats) == 1
        session = engine.session
        assert session.in_combat is True
        assert [p.name for p in session.participants] == ["Goblin"]
        assert session.participants[0].is_hostile is True

    def test_party_joins_the_fight(self, seeded_rng, fighter, wizard):
        engine = NarrativeEngine(rng=seeded_rng, party=[fighter, wizard])
        engine.process(START)
        ids = {p.id for p in engine.session.participants}
        assert {"pc-thorin", "pc-elminster"} <= ids
        thorin = next(p for p in engine.session.participants if p.id == "pc-thorin")
        assert thorin.is_hostile is False
        assert thorin.armor_class == 18
        assert thorin.hp == 44

    def test_active_character_takes_first_turn(self, seeded_rng, fighter, wizard):
        engine = NarrativeEngine(rng=seeded_rng, party=[fighter, wizard], active_character_id="pc-elminster")
        engine.process(START)
        session = engine.session
        active = [p for p in session.participants if p.is_active]
        assert [p.id for p in active] == ["pc-elminster"]
        assert session.participants[session.turn_index].id == "pc-elminster"

    def test_no_restart_while_in_combat(self, seeded_rng):
        engine = NarrativeEngine(rng=seeded_rng)
        engine.process(START)
        first = engine.session.participants[0].id
        outcome = engine.process("Roll for initiative! Another goblin attacks.")
        assert outcome.combat_started is False
        assert [p.id for p in engine.session.participants] == [first]

    def test_end_collects_loot(self, seeded_rng):
        engine = NarrativeEngine(rng=seeded_rng)
        engine.process(START)
        goblin = engine.session.participants[0]
        engine.combat.apply_damage(goblin.id, goblin.max_hp)
        outcome = engine.process(END)
        assert outcome.combat_ended is True
        assert engine.session.in_combat is False
        assert outcome.loot[0].category == LootCategory.GOLD
        assert outcome.loot[0].value == 20
        assert outcome.loot[0].source == "narrative"
        assert any(item.source == "goblin" for item in outcome.loot[1:])

    def test_end_while_idle_ignored(self, seeded_rng):
        outcome = NarrativeEngine(rng=seeded_rng).process(END)
        assert outcome.signal.ends_combat is True
        assert outcome.combat_ended is False
        assert outcome.loot == []

    def test_start_wins_when_idle(self, seeded_rng):
        engine = NarrativeEngine(rng=seeded_rng)
        outcome = engine.process("Combat ends... no wait, roll for initiative! A wolf lunges.")
        assert outcome.combat_started is True
        assert outcome.combat_ended is False
        assert engine.session.in_combat is True

    def test_end_wins_in_combat(self, seeded_rng):
        engine = NarrativeEngine(rng=seeded_rng)
        engine.process(START)
        outcome = engine.process("Combat ends. Later, roll for initiative against the orc.")
        assert outcome.combat_ended is True
        assert engine.session.in_combat is False

    def test_manual_end(self, seeded_rng):
        engine = NarrativeEngine(rng=seeded_rng)
        engine.process(START)
        engine.end_combat()
        assert engine.session.in_combat is False

    def test_manual_end_collects_defeated_loot(self, seeded_rng):
        engine = NarrativeEngine(rng=seeded_rng)
        engine.process(START)
        goblin = engine.session.participants[0]
        engine.combat.apply_damage(goblin.id, goblin.max_hp)
        loot = engine.end_combat()
        assert loot
        assert loot[0].category == LootCategory.GOLD
        assert all(item.source == "goblin" for item in loot)

    def test_party_member_not_spawned_as_enemy(self, seeded_rng, fighter):
        engine = NarrativeEngine(rng=seeded_rng, party=[fighter])
        engine.process("Roll for initiative! Thorin charges the orc.")
        session = engine.session
        assert sorted((p.name, p.is_hostile) for p in session.participants) == [("Orc", True), ("Thorin", False)]

    def test_fallback_named_like_party_member_dropped(self, seeded_rng, fighter):
        engine = NarrativeEngine(rng=seeded_rng, party=[fighter])
        outcome = engine.process("Roll for initiative! The Thorin attacks, and the Shade Hound lunges.")
        assert [m.name for m in outcome.mentions] == ["Shade Hound"]
        hostiles = [p.name for p in engine.session.participants if p.is_hostile]
        assert hostiles == ["Shade Hound"]

    def test_empty_text(self):
        assert NarrativeEngine().process("") == FragmentOutcome()


class TestSkillChecks:
    def test_detected_but_not_resolved(self, seeded_rng):
        outcome = NarrativeEngine(rng=seeded_rng).process("Make a DC 15 Wisdom (Perception) check.")
        assert [p.skill_or_ability for p in outcome.skill_checks] == ["perception"]
        assert outcome.resolutions == []

    def test_bracket_notation_toggle(self, seeded_rng):
        text = "[Roll: d20+Intelligence modifier vs DC 12]"
        on = NarrativeEngine(rng=seeded_rng).process(text)
        off = NarrativeEngine(EngineOptions(supports_bracket_notation=False), rng=seeded_rng).process(text)
        assert len(on.skill_checks) == 1
        assert off.skill_checks == []

    def test_auto_resolve_notifies(self, d20_rng, fighter):
        seen = []
        options = EngineOptions(auto_resolve=True, on_resolved=seen.append)
        engine = NarrativeEngine(options, rng=d20_rng(10), party=[fighter])
        outcome = engine.process("Make a DC 15 Dexterity (Stealth) check.")
        assert len(outcome.resolutions) == 1
        result = outcome.resolutions[0]
        assert result.total == 15
        assert result.success is True
        assert seen == [result]

    def test_callback_failure_swallowed(self, seeded_rng):
        def boom(result):
            raise RuntimeError("service down")

        engine = NarrativeEngine(EngineOptions(auto_resolve=True, on_resolved=boom), rng=seeded_rng)
        outcome = engine.process("Make an Intelligence check.")
        assert len(outcome.resolutions) == 1

    def test_manual_resolve_does_not_notify(self, seeded_rng):
        seen = []
        engine = NarrativeEngine(EngineOptions(on_resolved=seen.append), rng=seeded_rng)
        prompt = SkillCheckPrompt(id="skill-check-0", skill_or_ability="arcana", source_text="Arcana check")
        engine.resolve_skill_check(prompt)
        assert seen == []

    def test_roll_recorded_in_combat(self, d20_rng, fighter):
        engine = NarrativeEngine(rng=d20_rng(12), party=[fighter])
        engine.process(START)
        prompt = SkillCheckPrompt(
            id="skill-check-0", skill_or_ability="athletics", source_text="Athletics check", difficulty_class=10,
        )
        engine.resolve_skill_check(prompt, fighter)
        thorin = next(p for p in engine.session.participants if p.id == "pc-thorin")
        assert thorin.last_roll_result.purpose == "athletics check"
        assert thorin.last_roll_result.success is True


class TestActiveCharacter:
    def test_defaults_to_first(self, fighter, wizard):
        assert NarrativeEngine(party=[fighter, wizard]).active_character.id == "pc-thorin"

    def test_explicit(self, fighter, wizard):
        engine = NarrativeEngine()
        engine.set_party([fighter, wizard], active_id="pc-elminster")
        assert engine.active_character.id == "pc-elminster"

    def test_no_party(self):
        assert NarrativeEngine().active_character is None


@pytest.mark.parametrize("text", [START, END, "Make a Perception check.", "Nothing happens."])
def test_classification_is_stable_across_calls(text, seeded_rng):
    engine = NarrativeEngine(rng=seeded_rng)
    assert engine.scanner.classify(text) == engine.scanner.classify(text)
