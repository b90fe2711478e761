"""Procedural synthesis of threats and their loot from creature names."""
from __future__ import annotations

import logging

from narrative_engine.generation import loot_text
from narrative_engine.generation.rendering import render
from narrative_engine.generation.templates import (
    CREATURE_TEMPLATES,
    DEFAULT_WEAPON_VALUE,
    DEFAULT_WEAPON_WEIGHT,
    GENERIC_WEAPONS,
    GOLD_TIERS,
    MAGIC_ADJECTIVES,
    MAGIC_VALUE_BONUS,
    MAGIC_WEAPON_CHANCE,
    POTION_DROP_CHANCE,
    POTION_EFFECTS,
    POTION_VALUE,
    POTION_WEIGHT,
    UNKNOWN_AC_RANGE,
    UNKNOWN_HP_RANGE,
    UNKNOWN_LOOT_TIER,
    WEAPON_DROP_CHANCE,
    WEAPON_VALUES,
    CreatureTemplate,
    resolve_template_key,
)
from narrative_engine.mechanics.ability_scores import modifier
from narrative_engine.mechanics.dice import roll_d20
from narrative_engine.mechanics.rng import RandomSource, chance, choice, default_source, randint
from narrative_engine.models.loot import LootCategory, LootItem
from narrative_engine.models.threat import Threat

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"
GOLD_WEIGHT_PER_COIN = 0.02


class ProceduralGenerator:
    """Turns extracted creature names into stat blocks and loot.

    All randomness comes from the injected ``rng``; a seeded source makes
    every synthesis reproducible.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        templates: dict[str, CreatureTemplate] | None = None,
    ) -> None:
        self.rng = rng if rng is not None else default_source()
        self.templates = templates if templates is not None else CREATURE_TEMPLATES

    def template_for(self, type_name: str) -> CreatureTemplate | None:
        key = resolve_template_key(type_name, self.templates)
        return self.templates[key] if key else None

    def synthesize_threat(self, type_name: str) -> Threat:
        template = self.template_for(type_name)
        if template is None:
            threat = self._synthesize_unknown(type_name)
        else:
            threat = self._synthesize_from_template(template)
        threat.description = render(
            "threat.j2",
            known=template is not None,
            name=threat.name,
            hp=threat.hp,
            armor_class=threat.armor_class,
            weapons=threat.weapons,
            special_attacks=threat.special_attacks,
            spells=threat.spells,
        )
        logger.debug("Synthesized %s (hp=%d, ac=%s, init=%s)",
                     threat.name, threat.hp, threat.armor_class, threat.initiative)
        return threat

    def _synthesize_from_template(self, template: CreatureTemplate) -> Threat:
        hp = randint(self.rng, *template.hp_range)
        dex_mod = modifier(template.ability_scores.dexterity)
        initiative = roll_d20(dex_mod, self.rng).total
        return Threat(
            name=template.name.title(),
            type_key=template.name,
            hp=hp,
            max_hp=hp,
            armor_class=template.armor_class,
            initiative=initiative,
            ability_scores=template.ability_scores.model_copy(),
            weapons=list(template.weapons),
            special_attacks=list(template.special_attacks),
            spells=list(template.spells),
            loot=self.synthesize_loot(template.name),
        )

    def _synthesize_unknown(self, name: str) -> Threat:
        hp = randint(self.rng, *UNKNOWN_HP_RANGE)
        armor_class = randint(self.rng, *UNKNOWN_AC_RANGE)
        initiative = roll_d20(0, self.rng).total
        return Threat(
            name=name.strip() or "Unknown Foe",
            hp=hp,
            max_hp=hp,
            armor_class=armor_class,
            initiative=initiative,
            loot=self.synthesize_loot(UNKNOWN, source=name.strip() or None),
        )

    def synthesize_loot(self, type_name: str = UNKNOWN, source: str | None = None) -> list[LootItem]:
        """Gold is always dropped; the weapon and potion drops are independent rolls."""
        template = self.template_for(type_name) if type_name != UNKNOWN else None
        if source is None:
            source = template.name if template else UNKNOWN
        tier = template.loot_tier if template else UNKNOWN_LOOT_TIER
        weapon_pool = (template.weapons if template and template.weapons else GENERIC_WEAPONS)

        items: list[LootItem] = []

        gold_lo, gold_hi = GOLD_TIERS.get(tier, GOLD_TIERS[UNKNOWN_LOOT_TIER])
        gold = randint(self.rng, gold_lo, gold_hi)
        items.append(self._item(
            name="Gold Pieces",
            category=LootCategory.GOLD,
            quantity=gold,
            value=gold,
            weight=round(gold * GOLD_WEIGHT_PER_COIN, 2),
            rarity="common",
            is_magical=False,
            source=source,
        ))

        if chance(self.rng, WEAPON_DROP_CHANCE):
            weapon = choice(self.rng, weapon_pool)
            value = WEAPON_VALUES.get(weapon, DEFAULT_WEAPON_VALUE)
            name = weapon.title()
            rarity = "common"
            magical = chance(self.rng, MAGIC_WEAPON_CHANCE)
            if magical:
                name = f"{choice(self.rng, MAGIC_ADJECTIVES)} {name}"
                rarity = "uncommon"
                value += MAGIC_VALUE_BONUS
            items.append(self._item(
                name=name,
                category=LootCategory.WEAPON,
                value=value,
                weight=DEFAULT_WEAPON_WEIGHT,
                rarity=rarity,
                is_magical=magical,
                source=source,
            ))

        if chance(self.rng, POTION_DROP_CHANCE):
            effect = choice(self.rng, POTION_EFFECTS)
            items.append(self._item(
                name=f"Potion of {effect}",
                category=LootCategory.POTION,
                value=POTION_VALUE,
                weight=POTION_WEIGHT,
                rarity="common",
                is_magical=True,
                source=source,
            ))

        return items

    def extract_loot_from_text(self, text: str) -> list[LootItem]:
        return loot_text.extract_loot_from_text(text, self.rng)

    @staticmethod
    def _item(**fields) -> LootItem:
        description = render(
            "loot.j2",
            name=fields["name"],
            category=fields["category"].value,
            quantity=fields.get("quantity", 1),
            source=fields.get("source", ""),
            is_magical=fields.get("is_magical", False),
        )
        return LootItem(description=description, **fields)
