"""Tests for src/narrative_engine/detection/extractor.py."""
from __future__ import annotations

import pytest

from narrative_engine.detection.extractor import EntityExtractor
from narrative_engine.generation.templates import CreatureTemplate
from narrative_engine.models.character import AbilityScores
from narrative_engine.models.signals import MentionSource


@pytest.fixture
def extractor() -> EntityExtractor:
    return EntityExtractor()


class TestDictionaryMatches:
    def test_single_goblin(self, extractor):
        assert extractor.extract("A goblin attacks you") == ["goblin"]

    def test_plural_maps_to_type(self, extractor):
        assert extractor.extract("Three wolves circle the camp.") == ["wolf"]

    def test_case_insensitive(self, extractor):
        assert extractor.extract("An ORC bellows a war cry.") == ["orc"]

    def test_multiple_in_text_order(self, extractor):
        assert extractor.extract("A kobold and a bandit leap from the bushes.") == ["kobold", "bandit"]

    def test_each_occurrence_is_a_candidate(self, extractor):
        assert extractor.extract("A goblin yells. Another goblin answers.") == ["goblin", "goblin"]

    def test_longest_name_wins(self, extractor):
        mentions = extractor.find_mentions("A giant spider drops from the ceiling.")
        assert [m.type_key for m in mentions] == ["giant spider"]

    def test_no_substring_matches(self, extractor):
        assert "orc" not in extractor.extract("The sorcerer lights a torch.")

    def test_hobgoblin_not_goblin(self, extractor):
        assert extractor.extract("A hobgoblin raises its shield.") == ["hobgoblin"]

    def test_spans(self, extractor):
        text = "Suddenly a troll appears."
        mention = extractor.find_mentions(text)[0]
        assert text[mention.start:mention.end] == "troll"
        assert mention.source == MentionSource.DICTIONARY


class TestFallback:
    def test_capitalized_attacker(self, extractor):
        mentions = extractor.find_mentions("The Shadow Stalker lunges at you!")
        assert len(mentions) == 1
        assert mentions[0].name == "Shadow Stalker"
        assert mentions[0].type_key is None
        assert mentions[0].source == MentionSource.FALLBACK

    def test_appears_verb(self, extractor):
        assert extractor.extract("A Hollow Knight appears in the doorway.") == ["Hollow Knight"]

    @pytest.mark.parametrize("text", [
        "Thorin charges the orc's flank.",
        "Elminster strikes first.",
        "Suddenly Mirela lunges forward.",
    ])
    def test_article_required(self, extractor, text):
        assert [m for m in extractor.find_mentions(text) if m.type_key is None] == []

    def test_leading_word_before_article_ignored(self, extractor):
        assert extractor.extract("Then The Shadow Beast attacks you.") == ["Shadow Beast"]

    def test_leading_stopword_stripped(self, extractor):
        text = "A Suddenly Silent Wraith lunges."
        mention = extractor.find_mentions(text)[0]
        assert mention.name == "Silent Wraith"
        assert text[mention.start:mention.end] == "Silent Wraith"

    def test_pronoun_rejected(self, extractor):
        assert extractor.extract("It attacks without warning.") == []

    def test_known_type_not_duplicated(self, extractor):
        assert extractor.extract("The Goblin attacks!") == ["goblin"]

    def test_mixed_sorted_by_position(self, extractor):
        names = extractor.extract("The Bone Horror charges while a zombie shambles closer.")
        assert names == ["Bone Horror", "zombie"]


class TestEmpty:
    @pytest.mark.parametrize("text", ["", "The tavern is quiet tonight.", "Roll for initiative!"])
    def test_nothing_found(self, extractor, text):
        assert extractor.extract(text) == []


class TestCustomTemplates:
    def test_extended_table(self):
        templates = {
            "owlbear": CreatureTemplate(
                name="owlbear", plural="owlbears", hp_range=(50, 60), armor_class=13,
                ability_scores=AbilityScores(strength=20, dexterity=12),
            ),
        }
        extractor = EntityExtractor(templates)
        assert extractor.extract("Two owlbears crash through the trees.") == ["owlbear"]
        assert extractor.extract("A goblin watches.") == []
