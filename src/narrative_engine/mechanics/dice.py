"""Dice rolling engine: pure math, no I/O."""
from __future__ import annotations

import re
from dataclasses import dataclass

from narrative_engine.mechanics.rng import RandomSource, default_source, randint

# Pattern: NdM, optional +/-X
_DICE_RE = re.compile(r"^(\d+)d(\d+)([+-]\d+)?$", re.IGNORECASE)

_fallback_rng: RandomSource | None = None


def _rng(rng: RandomSource | None) -> RandomSource:
    global _fallback_rng
    if rng is not None:
        return rng
    if _fallback_rng is None:
        _fallback_rng = default_source()
    return _fallback_rng


@dataclass
class DiceResult:
    expression: str
    individual_rolls: list[int]
    modifier: int = 0
    total: int = 0


def roll(expression: str, rng: RandomSource | None = None) -> DiceResult:
    """Roll dice from an expression like '2d6+3' or '1d20'."""
    expr = expression.replace(" ", "")
    m = _DICE_RE.match(expr)
    if not m:
        raise ValueError(f"Invalid dice expression: {expression}")

    num_dice = int(m.group(1))
    die_size = int(m.group(2))
    modifier = int(m.group(3)) if m.group(3) else 0
    if die_size < 1:
        raise ValueError(f"Invalid dice expression: {expression}")

    source = _rng(rng)
    rolls = [randint(source, 1, die_size) for _ in range(num_dice)]
    return DiceResult(
        expression=expression,
        individual_rolls=rolls,
        modifier=modifier,
        total=sum(rolls) + modifier,
    )


def roll_d20(modifier: int = 0, rng: RandomSource | None = None) -> DiceResult:
    """Convenience: roll 1d20 + modifier."""
    r = roll("1d20", rng)
    r.modifier = modifier
    r.total = r.individual_rolls[0] + modifier
    return r
