"""Shared fixtures for the narrative engine test suite."""
from __future__ import annotations

import random

import pytest

from narrative_engine.models.character import AbilityScores, CharacterProjection


STANDARD_SCORES = {
    "strength": 15, "dexterity": 14, "constitution": 13,
    "intelligence": 12, "wisdom": 10, "charisma": 8,
}


class FixedRng:
    """Replays a fixed list of floats, cycling when exhausted."""

    def __init__(self, values: list[float]) -> None:
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def d20_face(n: int) -> float:
    """The float that makes a d20 land on ``n``."""
    return (n - 0.5) / 20


@pytest.fixture
def fixed_rng():
    """Factory: ``fixed_rng([0.1, 0.5])`` builds a scripted source."""
    return FixedRng


@pytest.fixture
def d20_rng():
    """Factory: ``d20_rng(17, 3)`` makes successive d20s land on 17 then 3."""
    def build(*faces: int) -> FixedRng:
        return FixedRng([d20_face(n) for n in faces])
    return build


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def sample_ability_scores() -> AbilityScores:
    return AbilityScores(**STANDARD_SCORES)


@pytest.fixture
def fighter() -> CharacterProjection:
    return CharacterProjection(
        id="pc-thorin",
        name="Thorin",
        ability_scores=AbilityScores(**STANDARD_SCORES),
        level=5,
        hp=44,
        max_hp=44,
        armor_class=18,
    )


@pytest.fixture
def wizard() -> CharacterProjection:
    return CharacterProjection(
        id="pc-elminster",
        name="Elminster",
        ability_scores=AbilityScores(intelligence=18, wisdom=14, dexterity=12),
        level=1,
    )
