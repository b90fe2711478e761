"""Scans post-combat narrative for loot-shaped phrases."""
from __future__ import annotations

import re

from narrative_engine.generation.rendering import render
from narrative_engine.mechanics.rng import RandomSource, chance, default_source
from narrative_engine.models.loot import LootCategory, LootItem

MAGICAL_CHANCE = 0.7
UNCOMMON_VALUE_THRESHOLD = 100

CATEGORY_WEIGHTS: dict[LootCategory, float] = {
    LootCategory.WEAPON: 3.0,
    LootCategory.ARMOR: 10.0,
    LootCategory.POTION: 0.5,
    LootCategory.SCROLL: 0.1,
    LootCategory.WONDROUS: 1.0,
    LootCategory.GEM: 0.1,
    LootCategory.OTHER: 1.0,
}
GOLD_WEIGHT_PER_COIN = 0.02

_WEAPON_NOUNS = (
    "longsword", "shortsword", "greatsword", "sword", "scimitar", "rapier", "dagger",
    "greataxe", "battleaxe", "handaxe", "axe", "warhammer", "hammer", "mace", "flail",
    "spear", "halberd", "quarterstaff", "staff", "longbow", "shortbow", "crossbow", "bow",
    "club", "whip",
)
_ARMOR_NOUNS = (
    "chain mail", "plate armor", "armor", "armour", "breastplate", "shield", "helmet",
    "helm", "gauntlets",
)
_MAGIC_WORDS = frozenset({
    "enchanted", "magical", "magic", "glowing", "ancient", "legendary", "rare", "runed",
    "flaming", "frost", "holy", "cursed", "shimmering",
})
_FINE_WORDS = frozenset({
    "fine", "silver", "gold", "golden", "masterwork", "jeweled", "ornate", "quality", "mithral",
})
# Words that end an adjective run: articles, pronouns, verbs of finding.
_NOT_ADJECTIVES = frozenset({
    "a", "an", "the", "some", "his", "her", "its", "their", "your", "my", "our", "and", "or",
    "of", "with", "you", "find", "finds", "found", "discover", "discovers", "take", "takes",
    "grab", "loot", "drops", "dropped", "carried", "carrying", "was", "were", "is", "are",
    "two", "three", "four", "five", "several", "pair", "set",
})

_EFFECT = r"(?P<effect>[A-Za-z]+(?:\s+(?!(?:and|or|from|with|in|on|to|that|which|for|as)\b)[A-Za-z]+)?)"


def _alternation(words: tuple[str, ...]) -> str:
    ordered = sorted(words, key=len, reverse=True)
    return "|".join(r"\s+".join(re.escape(p) for p in w.split()) for w in ordered)


_GOLD_RE = re.compile(
    r"(?<![\d,])(?<!worth )(?<!valued at )\b(?P<amount>\d[\d,]*)\s*"
    r"(?:gold(?:\s+(?:pieces|coins))?|gp)\b",
    re.IGNORECASE,
)
_GEAR_RE = re.compile(
    r"\b(?P<adjs>(?:[A-Za-z'\-]+\s+){0,2})"
    rf"(?:(?P<weapon>{_alternation(_WEAPON_NOUNS)})|(?P<armor>{_alternation(_ARMOR_NOUNS)}))s?\b",
    re.IGNORECASE,
)
_POTION_RE = re.compile(rf"\bpotions?\s+of\s+{_EFFECT}", re.IGNORECASE)
_SCROLL_RE = re.compile(rf"\bscrolls?\s+of\s+{_EFFECT}", re.IGNORECASE)
_WONDROUS_RE = re.compile(
    rf"\b(?P<kind>amulet|ring|cloak|boots|wand|necklace|circlet|bracers)s?\s+of\s+{_EFFECT}",
    re.IGNORECASE,
)
_GEM_RE = re.compile(
    r"\b(?P<gem>gemstone|gem|ruby|emerald|sapphire|diamond|pearl|jewel|opal)s?\s+"
    r"(?:worth|valued\s+at)\s+(?P<value>\d[\d,]*)\s*(?:gold|gp)\b",
    re.IGNORECASE,
)

POTION_VALUE = 50
SCROLL_VALUE = 75
WONDROUS_VALUE = 150
GEAR_VALUES = {"magic": 150, "fine": 50, "plain": 10}


def rarity_for(value: int | None) -> str:
    return "uncommon" if value is not None and value > UNCOMMON_VALUE_THRESHOLD else "common"


def _amount(raw: str) -> int:
    return int(raw.replace(",", ""))


def _adjectives(raw: str) -> list[str]:
    words = raw.split()
    kept: list[str] = []
    for word in reversed(words):
        if word.lower() in _NOT_ADJECTIVES:
            break
        kept.insert(0, word)
    return kept


def _title(words: str) -> str:
    return " ".join(w if w.lower() == "of" else w.capitalize() for w in words.split())


def _item(name: str, category: LootCategory, value: int, *, is_magical: bool,
          quantity: int = 1, weight: float | None = None) -> LootItem:
    if weight is None:
        weight = CATEGORY_WEIGHTS[category]
    description = render(
        "loot.j2", name=name, category=category.value, quantity=quantity,
        source="", is_magical=is_magical,
    )
    return LootItem(
        name=name,
        description=description,
        category=category,
        value=value,
        weight=weight,
        rarity=rarity_for(value),
        is_magical=is_magical,
        quantity=quantity,
        source="narrative",
    )


def extract_loot_from_text(text: str, rng: RandomSource | None = None) -> list[LootItem]:
    """One independent pattern per category; hits are concatenated category by category.

    Gold and gems are never magical. Every other hit is magical with 70% probability.
    """
    if not text:
        return []
    rng = rng if rng is not None else default_source()
    items: list[LootItem] = []

    for match in _GOLD_RE.finditer(text):
        amount = _amount(match.group("amount"))
        if amount <= 0:
            continue
        items.append(_item(
            "Gold Pieces", LootCategory.GOLD, amount, is_magical=False,
            quantity=amount, weight=round(amount * GOLD_WEIGHT_PER_COIN, 2),
        ))

    for match in _GEAR_RE.finditer(text):
        adjectives = _adjectives(match.group("adjs"))
        # "your shield" or "his staff" is gear in use, not spoils.
        if not adjectives:
            continue
        noun = match.group("weapon") or match.group("armor")
        category = LootCategory.WEAPON if match.group("weapon") else LootCategory.ARMOR
        lowered = {a.lower() for a in adjectives}
        if lowered & _MAGIC_WORDS:
            value = GEAR_VALUES["magic"]
        elif lowered & _FINE_WORDS:
            value = GEAR_VALUES["fine"]
        else:
            value = GEAR_VALUES["plain"]
        name = _title(" ".join(adjectives + [" ".join(noun.split())]))
        items.append(_item(name, category, value, is_magical=chance(rng, MAGICAL_CHANCE)))

    for match in _POTION_RE.finditer(text):
        name = f"Potion of {_title(match.group('effect'))}"
        items.append(_item(name, LootCategory.POTION, POTION_VALUE, is_magical=chance(rng, MAGICAL_CHANCE)))

    for match in _SCROLL_RE.finditer(text):
        name = f"Scroll of {_title(match.group('effect'))}"
        items.append(_item(name, LootCategory.SCROLL, SCROLL_VALUE, is_magical=chance(rng, MAGICAL_CHANCE)))

    for match in _WONDROUS_RE.finditer(text):
        name = f"{match.group('kind').capitalize()} of {_title(match.group('effect'))}"
        items.append(_item(name, LootCategory.WONDROUS, WONDROUS_VALUE, is_magical=chance(rng, MAGICAL_CHANCE)))

    for match in _GEM_RE.finditer(text):
        value = _amount(match.group("value"))
        items.append(_item(match.group("gem").capitalize(), LootCategory.GEM, value, is_magical=False))

    return items
