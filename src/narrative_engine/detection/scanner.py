"""Classifies narrative text as combat start/end and finds skill-check mentions."""
from __future__ import annotations

import logging
import re

from narrative_engine.mechanics.ability_scores import ABILITY_NAMES, expand_ability
from narrative_engine.mechanics.skills import SKILL_ABILITY_MAP, canonical_check_name
from narrative_engine.models.signals import CombatSignal
from narrative_engine.models.skill_check import CheckKind, CheckNotation, SkillCheckPrompt

logger = logging.getLogger(__name__)

# Trigger phrases, matched as case-insensitive substrings.
COMBAT_START_PHRASES: tuple[str, ...] = (
    "combat begins",
    "combat has begun",
    "roll for initiative",
    "rolls for initiative",
    "roll initiative",
    "initiative order",
    "battle starts",
    "battle begins",
    "prepare for combat",
    "draw your weapons",
    "enemies appear",
    "hostile creatures",
    "you are ambushed",
    "you are under attack",
)

COMBAT_END_PHRASES: tuple[str, ...] = (
    "combat ends",
    "combat has ended",
    "combat is over",
    "battle is over",
    "battle ends",
    "the fight is over",
    "loot the fallen",
    "enemies are defeated",
    "enemies have been defeated",
    "victory is yours",
    "peace returns",
    "the threat has been eliminated",
)


def _name_alternation(names: list[str]) -> str:
    # Longest first so "sleight of hand" wins over any shorter prefix.
    ordered = sorted(names, key=len, reverse=True)
    return "|".join(r"\s+".join(re.escape(w) for w in n.split("_")) for n in ordered)


_ABILITY_ALT = _name_alternation(ABILITY_NAMES)
_CHECK_NAME_ALT = _name_alternation(list(SKILL_ABILITY_MAP) + ABILITY_NAMES)

# "[make a] [DC 15] [Wisdom (]Perception[)] check|saving throw [(DC 15)]"
_INLINE_CHECK_RE = re.compile(
    r"(?:\b(?:make|roll)\s+(?:an?|your)\s+)?"
    r"(?:\bDC\s*(?P<dc>\d+)\s+)?"
    rf"(?:\b(?P<ability>{_ABILITY_ALT})\s*\(\s*)?"
    rf"\b(?P<name>{_CHECK_NAME_ALT})\s*\)?\s*"
    r"(?:ability\s+)?(?P<kind>checks?|saving\s+throws?)\b"
    r"(?:\s*[,;]?\s*\(?\s*DC\s*(?P<dc_after>\d+)\s*\)?)?",
    re.IGNORECASE,
)

# "[Roll: d20+Intelligence modifier vs DC 12]"
_BRACKET_CHECK_RE = re.compile(
    r"\[Roll:[^\]]*?(?:vs\.?|against)\s+DC\s*(?P<dc>\d+)[^\]]*\]",
    re.IGNORECASE,
)
_BRACKET_MODIFIER_RE = re.compile(r"d20\s*\+\s*(?P<name>[A-Za-z]+(?:\s+(?:of\s+)?[A-Za-z]+)?)", re.IGNORECASE)
_ANY_ABILITY_RE = re.compile(rf"\b({_ABILITY_ALT})\b", re.IGNORECASE)


class TextSignalScanner:
    """Stateless: the same text always yields the same signal and prompts."""

    def __init__(self, supports_bracket_notation: bool = True) -> None:
        self.supports_bracket_notation = supports_bracket_notation

    def classify(self, text: str) -> CombatSignal:
        if not text:
            return CombatSignal()
        lowered = text.lower()
        return CombatSignal(
            starts_combat=any(p in lowered for p in COMBAT_START_PHRASES),
            ends_combat=any(p in lowered for p in COMBAT_END_PHRASES),
        )

    def find_skill_checks(self, text: str) -> list[SkillCheckPrompt]:
        if not text:
            return []
        prompts: list[SkillCheckPrompt] = []

        for match in _INLINE_CHECK_RE.finditer(text):
            name = canonical_check_name(match.group("name"))
            if name is None:
                logger.debug("Discarding unrecognized check name %r", match.group("name"))
                continue
            dc_raw = match.group("dc") or match.group("dc_after")
            kind = CheckKind.CHECK if match.group("kind").lower().startswith("check") else CheckKind.SAVING_THROW
            prompts.append(SkillCheckPrompt(
                id=f"skill-check-{len(prompts)}",
                skill_or_ability=name,
                source_text=match.group(0).strip(),
                difficulty_class=int(dc_raw) if dc_raw else None,
                kind=kind,
                notation=CheckNotation.INLINE,
            ))

        if self.supports_bracket_notation:
            for match in _BRACKET_CHECK_RE.finditer(text):
                name = _bracket_check_name(match.group(0))
                if name is None:
                    logger.debug("Discarding bracket roll without a known check: %r", match.group(0))
                    continue
                prompts.append(SkillCheckPrompt(
                    id=f"skill-check-{len(prompts)}",
                    skill_or_ability=name,
                    source_text=match.group(0),
                    difficulty_class=int(match.group("dc")),
                    kind=CheckKind.CHECK,
                    notation=CheckNotation.BRACKET,
                ))

        return prompts


def _bracket_check_name(bracket: str) -> str | None:
    mod_match = _BRACKET_MODIFIER_RE.search(bracket)
    if mod_match:
        raw = re.sub(r"\s+modifier$", "", mod_match.group("name").strip(), flags=re.IGNORECASE)
        name = expand_ability(raw) or canonical_check_name(raw)
        if name is None:
            # Trailing words such as "vs": retry on the first word alone.
            first = raw.split()[0]
            name = expand_ability(first) or canonical_check_name(first)
        if name is not None:
            return name
    ability_match = _ANY_ABILITY_RE.search(bracket)
    if ability_match:
        return ability_match.group(1).lower()
    return None
