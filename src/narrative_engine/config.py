"""Loads config.toml and turns it into engine options."""
from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from narrative_engine.mechanics.rng import RandomSource, default_source
from narrative_engine.models.skill_check import CheckResult

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.toml"


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load config.toml from the project root (or ``path``). Missing file -> {}."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if config_path.exists():
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    logger.debug("No config file at %s, using defaults", config_path)
    return {}


class EngineOptions(BaseModel):
    """The switches that used to distinguish the separate detection hooks."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    supports_bracket_notation: bool = True
    auto_resolve: bool = False
    on_resolved: Optional[Callable[[CheckResult], None]] = None


class NotifierSettings(BaseModel):
    base_url: str = "http://localhost:5000"
    route: str = ""
    timeout: float = 5.0


class EngineSettings(BaseModel):
    supports_bracket_notation: bool = True
    auto_resolve: bool = False
    seed: Optional[int] = None
    log_level: str = "WARNING"
    notifier: NotifierSettings = Field(default_factory=NotifierSettings)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> EngineSettings:
        engine_cfg = config.get("engine", {})
        return cls(
            supports_bracket_notation=engine_cfg.get("supports_bracket_notation", True),
            auto_resolve=engine_cfg.get("auto_resolve", False),
            seed=engine_cfg.get("seed"),
            log_level=config.get("logging", {}).get("level", "WARNING"),
            notifier=NotifierSettings(**config.get("notifier", {})),
        )

    def to_options(self, on_resolved: Callable[[CheckResult], None] | None = None) -> EngineOptions:
        return EngineOptions(
            supports_bracket_notation=self.supports_bracket_notation,
            auto_resolve=self.auto_resolve,
            on_resolved=on_resolved,
        )

    def build_rng(self) -> RandomSource:
        return default_source(self.seed)
