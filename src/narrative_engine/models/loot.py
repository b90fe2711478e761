from __future__ import annotations

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LootCategory(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    POTION = "potion"
    SCROLL = "scroll"
    WONDROUS = "wondrous"
    GOLD = "gold"
    GEM = "gem"
    OTHER = "other"


class LootItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: str = ""
    category: LootCategory = LootCategory.OTHER
    value: Optional[int] = None
    weight: Optional[float] = None
    rarity: Optional[str] = None
    is_magical: Optional[bool] = None
    quantity: int = 1
    source: str = ""
