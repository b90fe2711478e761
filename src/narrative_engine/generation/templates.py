"""Creature templates and loot tables: pure data, no I/O.

Adding a creature means adding a row to ``CREATURE_TEMPLATES``; detection and
synthesis both read the table, so no control flow changes.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from narrative_engine.models.character import AbilityScores


class CreatureTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    plural: str
    hp_range: tuple[int, int]
    armor_class: int
    ability_scores: AbilityScores
    weapons: tuple[str, ...] = ()
    special_attacks: tuple[str, ...] = ()
    spells: tuple[str, ...] = ()
    loot_tier: str = "weak"


def _scores(st: int, dx: int, co: int, in_: int, wi: int, ch: int) -> AbilityScores:
    return AbilityScores(
        strength=st, dexterity=dx, constitution=co,
        intelligence=in_, wisdom=wi, charisma=ch,
    )


CREATURE_TEMPLATES: dict[str, CreatureTemplate] = {
    "goblin": CreatureTemplate(
        name="goblin", plural="goblins", hp_range=(7, 10), armor_class=15,
        ability_scores=_scores(8, 14, 10, 10, 8, 8),
        weapons=("scimitar", "shortbow"), special_attacks=("Nimble Escape",),
    ),
    "hobgoblin": CreatureTemplate(
        name="hobgoblin", plural="hobgoblins", hp_range=(11, 16), armor_class=18,
        ability_scores=_scores(13, 12, 12, 10, 10, 9),
        weapons=("longsword", "longbow"), special_attacks=("Martial Advantage",),
        loot_tier="elite",
    ),
    "kobold": CreatureTemplate(
        name="kobold", plural="kobolds", hp_range=(5, 7), armor_class=12,
        ability_scores=_scores(7, 15, 9, 8, 7, 8),
        weapons=("dagger", "sling"), special_attacks=("Pack Tactics",),
    ),
    "orc": CreatureTemplate(
        name="orc", plural="orcs", hp_range=(13, 17), armor_class=13,
        ability_scores=_scores(16, 12, 16, 7, 11, 10),
        weapons=("greataxe", "javelin"), special_attacks=("Aggressive",),
        loot_tier="elite",
    ),
    "bandit": CreatureTemplate(
        name="bandit", plural="bandits", hp_range=(9, 13), armor_class=12,
        ability_scores=_scores(11, 12, 12, 10, 10, 10),
        weapons=("scimitar", "light crossbow"),
    ),
    "cultist": CreatureTemplate(
        name="cultist", plural="cultists", hp_range=(7, 11), armor_class=12,
        ability_scores=_scores(11, 12, 10, 10, 11, 10),
        weapons=("scimitar", "dagger"), special_attacks=("Dark Devotion",),
    ),
    "guard": CreatureTemplate(
        name="guard", plural="guards", hp_range=(9, 13), armor_class=16,
        ability_scores=_scores(13, 12, 12, 10, 11, 10),
        weapons=("spear", "shield"),
    ),
    "wolf": CreatureTemplate(
        name="wolf", plural="wolves", hp_range=(9, 13), armor_class=13,
        ability_scores=_scores(12, 15, 12, 3, 12, 6),
        special_attacks=("Bite", "Pack Tactics", "Knockdown"),
    ),
    "zombie": CreatureTemplate(
        name="zombie", plural="zombies", hp_range=(20, 24), armor_class=8,
        ability_scores=_scores(13, 6, 16, 3, 6, 5),
        special_attacks=("Slam", "Undead Fortitude"),
    ),
    "skeleton": CreatureTemplate(
        name="skeleton", plural="skeletons", hp_range=(11, 15), armor_class=13,
        ability_scores=_scores(10, 14, 15, 6, 8, 5),
        weapons=("shortsword", "shortbow"),
    ),
    "giant spider": CreatureTemplate(
        name="giant spider", plural="giant spiders", hp_range=(24, 30), armor_class=14,
        ability_scores=_scores(14, 16, 12, 2, 11, 4),
        special_attacks=("Poison Bite", "Web", "Spider Climb"),
        loot_tier="brute",
    ),
    "ogre": CreatureTemplate(
        name="ogre", plural="ogres", hp_range=(55, 65), armor_class=11,
        ability_scores=_scores(19, 8, 16, 5, 7, 7),
        weapons=("greatclub", "javelin"),
        loot_tier="brute",
    ),
    "troll": CreatureTemplate(
        name="troll", plural="trolls", hp_range=(75, 90), armor_class=15,
        ability_scores=_scores(18, 13, 20, 7, 9, 7),
        special_attacks=("Claw", "Bite", "Regeneration"),
        loot_tier="brute",
    ),
    "mage": CreatureTemplate(
        name="mage", plural="mages", hp_range=(36, 44), armor_class=12,
        ability_scores=_scores(9, 14, 11, 17, 12, 11),
        weapons=("dagger", "quarterstaff"),
        spells=("fire bolt", "magic missile", "shield", "fireball"),
        loot_tier="elite",
    ),
    "demon": CreatureTemplate(
        name="demon", plural="demons", hp_range=(60, 85), armor_class=15,
        ability_scores=_scores(18, 14, 18, 10, 12, 14),
        weapons=("barbed whip",), special_attacks=("Claw", "Fiery Aura"),
        spells=("darkness", "fear"),
        loot_tier="legendary",
    ),
    "dragon": CreatureTemplate(
        name="dragon", plural="dragons", hp_range=(120, 180), armor_class=18,
        ability_scores=_scores(23, 10, 21, 14, 11, 19),
        special_attacks=("Bite", "Claw", "Frightful Presence", "Breath Weapon"),
        loot_tier="legendary",
    ),
}

# Gold range in gp per loot tier, both ends inclusive.
GOLD_TIERS: dict[str, tuple[int, int]] = {
    "weak": (1, 10),
    "elite": (15, 44),
    "brute": (20, 69),
    "legendary": (100, 399),
}

UNKNOWN_LOOT_TIER = "weak"
UNKNOWN_HP_RANGE = (10, 29)
UNKNOWN_AC_RANGE = (10, 14)

# Dropped by creatures without their own weapon pool.
GENERIC_WEAPONS: tuple[str, ...] = ("dagger", "club", "shortsword", "handaxe")

WEAPON_VALUES: dict[str, int] = {
    "dagger": 2,
    "club": 1,
    "handaxe": 5,
    "javelin": 1,
    "sling": 1,
    "spear": 1,
    "quarterstaff": 1,
    "scimitar": 25,
    "shortsword": 10,
    "longsword": 15,
    "greataxe": 30,
    "greatclub": 2,
    "shortbow": 25,
    "longbow": 50,
    "light crossbow": 25,
    "barbed whip": 40,
    "shield": 10,
}
DEFAULT_WEAPON_VALUE = 10
DEFAULT_WEAPON_WEIGHT = 3.0

MAGIC_ADJECTIVES: tuple[str, ...] = (
    "Flaming", "Frost", "Shocking", "Vicious", "Glowing", "Runed", "Shadow", "Radiant",
)
MAGIC_VALUE_BONUS = 100

POTION_EFFECTS: tuple[str, ...] = (
    "Healing", "Greater Healing", "Climbing", "Fire Resistance",
    "Invisibility", "Water Breathing", "Heroism", "Speed",
)
POTION_VALUE = 50
POTION_WEIGHT = 0.5

WEAPON_DROP_CHANCE = 0.5
MAGIC_WEAPON_CHANCE = 0.1
POTION_DROP_CHANCE = 0.2


def resolve_template_key(
    name: str, templates: dict[str, CreatureTemplate] | None = None,
) -> str | None:
    """Map 'Goblins', 'goblin' or 'Giant  Spider' to a template key."""
    table = templates if templates is not None else CREATURE_TEMPLATES
    key = " ".join(name.strip().lower().split())
    if key in table:
        return key
    for type_key, template in table.items():
        if key == template.plural:
            return type_key
    return None
