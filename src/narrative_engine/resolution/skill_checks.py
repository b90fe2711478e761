"""Skill check resolution: modifiers and a single d20 roll against an optional DC."""
from __future__ import annotations

import logging

from narrative_engine.mechanics.ability_scores import modifier
from narrative_engine.mechanics.dice import roll_d20
from narrative_engine.mechanics.rng import RandomSource, default_source
from narrative_engine.mechanics.skills import (
    canonical_check_name,
    governing_ability,
    is_ability,
    proficiency_bonus,
)
from narrative_engine.models.character import CharacterProjection
from narrative_engine.models.skill_check import CheckResult, SkillCheckPrompt

logger = logging.getLogger(__name__)


class SkillCheckResolver:
    """Never fails: a missing character or unknown skill resolves with modifier 0.

    Every skill is treated as proficient because no proficiency list reaches
    this layer.
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        self.rng = rng if rng is not None else default_source()

    def modifier_for(self, skill_or_ability: str, character: CharacterProjection | None) -> int:
        if character is None:
            return 0
        name = canonical_check_name(skill_or_ability)
        if name is None:
            logger.debug("No modifier for unrecognized check %r", skill_or_ability)
            return 0
        scores = character.ability_scores
        if is_ability(name):
            return modifier(scores.score(name))
        ability = governing_ability(name)
        return modifier(scores.score(ability)) + proficiency_bonus(character.level)

    def resolve(self, prompt: SkillCheckPrompt, character: CharacterProjection | None = None) -> CheckResult:
        mod = self.modifier_for(prompt.skill_or_ability, character)
        result = roll_d20(mod, self.rng)
        natural = result.individual_rolls[0]
        dc = prompt.difficulty_class
        return CheckResult(
            skill_or_ability=prompt.skill_or_ability,
            roll=natural,
            modifier=mod,
            total=result.total,
            difficulty_class=dc,
            success=(result.total >= dc) if dc is not None else None,
        )
