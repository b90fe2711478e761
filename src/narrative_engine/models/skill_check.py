from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class CheckKind(str, Enum):
    CHECK = "check"
    SAVING_THROW = "saving_throw"


class CheckNotation(str, Enum):
    INLINE = "inline"
    BRACKET = "bracket"


class SkillCheckPrompt(BaseModel):
    """One detected mention of a check in a text fragment. Recreated on every scan."""

    model_config = ConfigDict(frozen=True)

    id: str
    skill_or_ability: str
    source_text: str
    difficulty_class: Optional[int] = None
    kind: CheckKind = CheckKind.CHECK
    notation: CheckNotation = CheckNotation.INLINE


class CheckResult(BaseModel):
    skill_or_ability: str
    roll: int
    modifier: int = 0
    total: int = 0
    difficulty_class: Optional[int] = None
    # None when there is no DC to judge against.
    success: Optional[bool] = None
