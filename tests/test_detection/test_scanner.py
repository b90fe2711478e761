"""Tests for src/narrative_engine/detection/scanner.py."""
from __future__ import annotations

import pytest

from narrative_engine.detection.scanner import TextSignalScanner
from narrative_engine.models.signals import CombatSignal
from narrative_engine.models.skill_check import CheckKind, CheckNotation


@pytest.fixture
def scanner() -> TextSignalScanner:
    return TextSignalScanner()


class TestClassify:
    @pytest.mark.parametrize("text", [
        "Roll for initiative!",
        "The goblins snarl. COMBAT BEGINS.",
        "You are ambushed by bandits on the road.",
        "Draw your weapons, the enemies appear from the mist.",
    ])
    def test_starts_combat(self, scanner, text):
        signal = scanner.classify(text)
        assert signal.starts_combat is True
        assert signal.ends_combat is False

    @pytest.mark.parametrize("text", [
        "The battle is over and you loot the fallen.",
        "Victory is yours!",
        "The enemies are defeated.",
    ])
    def test_ends_combat(self, scanner, text):
        signal = scanner.classify(text)
        assert signal.ends_combat is True
        assert signal.starts_combat is False

    def test_both_flags(self, scanner):
        signal = scanner.classify("Combat ends. Moments later, roll for initiative again!")
        assert signal == CombatSignal(starts_combat=True, ends_combat=True)

    @pytest.mark.parametrize("text", ["", "You walk into a quiet tavern.", "Initiative is a virtue."])
    def test_neutral(self, scanner, text):
        assert scanner.classify(text) == CombatSignal()

    def test_idempotent(self, scanner):
        text = "The battle begins as the orc charges."
        assert scanner.classify(text) == scanner.classify(text)


class TestInlineChecks:
    def test_dc_with_ability_and_skill(self, scanner):
        prompts = scanner.find_skill_checks("Make a DC 15 Wisdom (Perception) check.")
        assert len(prompts) == 1
        assert prompts[0].skill_or_ability == "perception"
        assert prompts[0].difficulty_class == 15
        assert prompts[0].kind == CheckKind.CHECK
        assert prompts[0].notation == CheckNotation.INLINE

    def test_plain_ability_check(self, scanner):
        prompts = scanner.find_skill_checks("Make an Intelligence check")
        assert len(prompts) == 1
        assert prompts[0].skill_or_ability == "intelligence"
        assert prompts[0].difficulty_class is None

    def test_multi_word_skill(self, scanner):
        prompts = scanner.find_skill_checks("Roll a Sleight of Hand check to palm the key.")
        assert [p.skill_or_ability for p in prompts] == ["sleight_of_hand"]

    def test_saving_throw(self, scanner):
        prompts = scanner.find_skill_checks("Make a DC 13 Dexterity saving throw!")
        assert prompts[0].skill_or_ability == "dexterity"
        assert prompts[0].kind == CheckKind.SAVING_THROW
        assert prompts[0].difficulty_class == 13

    def test_trailing_dc(self, scanner):
        prompts = scanner.find_skill_checks("Give me a Stealth check (DC 12).")
        assert prompts[0].skill_or_ability == "stealth"
        assert prompts[0].difficulty_class == 12

    @pytest.mark.parametrize("text", [
        "Roll a Perception check, DC 15",
        "Roll a Perception check; DC 15.",
        "Roll a Perception check, (DC 15)",
    ])
    def test_trailing_dc_after_punctuation(self, scanner, text):
        prompts = scanner.find_skill_checks(text)
        assert prompts[0].skill_or_ability == "perception"
        assert prompts[0].difficulty_class == 15

    def test_multiple_in_order(self, scanner):
        text = "Make a Perception check. Then make an Athletics check to climb."
        prompts = scanner.find_skill_checks(text)
        assert [p.skill_or_ability for p in prompts] == ["perception", "athletics"]
        assert [p.id for p in prompts] == ["skill-check-0", "skill-check-1"]

    def test_unknown_skill_ignored(self, scanner):
        assert scanner.find_skill_checks("Make a Cooking check.") == []

    def test_no_checks(self, scanner):
        assert scanner.find_skill_checks("") == []
        assert scanner.find_skill_checks("You check the door for traps.") == []

    def test_source_text_recorded(self, scanner):
        prompts = scanner.find_skill_checks("Please make a DC 10 Insight check now.")
        assert "Insight check" in prompts[0].source_text


class TestBracketChecks:
    def test_ability_modifier(self, scanner):
        prompts = scanner.find_skill_checks("[Roll: d20+Intelligence modifier vs DC 12]")
        assert len(prompts) == 1
        assert prompts[0].skill_or_ability == "intelligence"
        assert prompts[0].difficulty_class == 12
        assert prompts[0].notation == CheckNotation.BRACKET

    def test_skill_name(self, scanner):
        prompts = scanner.find_skill_checks("[Roll: d20+Stealth vs DC 14]")
        assert prompts[0].skill_or_ability == "stealth"

    def test_abbreviation(self, scanner):
        prompts = scanner.find_skill_checks("[Roll: d20+Dex against DC 11]")
        assert prompts[0].skill_or_ability == "dexterity"

    def test_unrecognized_discarded(self, scanner):
        assert scanner.find_skill_checks("[Roll: d20+Luck vs DC 10]") == []

    def test_disabled(self):
        scanner = TextSignalScanner(supports_bracket_notation=False)
        assert scanner.find_skill_checks("[Roll: d20+Intelligence modifier vs DC 12]") == []

    def test_inline_before_bracket(self, scanner):
        text = "[Roll: d20+Wisdom vs DC 10] and make a Perception check."
        prompts = scanner.find_skill_checks(text)
        assert [p.notation for p in prompts] == [CheckNotation.INLINE, CheckNotation.BRACKET]
        assert [p.id for p in prompts] == ["skill-check-0", "skill-check-1"]
