"""Typer CLI application."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from narrative_engine.cli.display import Display
from narrative_engine.config import EngineSettings, load_config
from narrative_engine.mechanics.ability_scores import expand_ability
from narrative_engine.mechanics.rng import default_source
from narrative_engine.models.character import AbilityScores, CharacterProjection

app = typer.Typer(
    name="narrative-engine",
    help="Detect combat, creatures and skill checks in narrative text",
    no_args_is_help=True,
)

_FRAGMENT_SPLIT = re.compile(r"\n\s*\n")


def _settings() -> EngineSettings:
    return EngineSettings.from_config(load_config())


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    settings = _settings()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _parse_scores(scores: list[str]) -> AbilityScores:
    values: dict[str, int] = {}
    for raw in scores:
        name, sep, value = raw.partition("=")
        ability = expand_ability(name.strip())
        if not sep or ability is None:
            raise typer.BadParameter(f"Expected ability=value, got {raw!r}", param_hint="--score")
        try:
            values[ability] = int(value)
        except ValueError:
            raise typer.BadParameter(f"Score must be an integer, got {value!r}", param_hint="--score")
    return AbilityScores(**values)


@app.command()
def scan(text: str = typer.Argument(..., help="Narrative fragment to scan")) -> None:
    """Classify a fragment and list the checks and creatures it mentions."""
    from narrative_engine.detection.extractor import EntityExtractor
    from narrative_engine.detection.scanner import TextSignalScanner

    settings = _settings()
    scanner = TextSignalScanner(settings.supports_bracket_notation)
    display = Display()
    display.show_signal(scanner.classify(text))
    display.show_skill_checks(scanner.find_skill_checks(text))
    display.show_mentions(EntityExtractor().find_mentions(text))


@app.command()
def encounter(
    text: str = typer.Argument(..., help="Fragment that opens the fight"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible rolls"),
) -> None:
    """Synthesize the threats a fragment mentions and show the turn order."""
    from narrative_engine.engine.narrative_engine import NarrativeEngine

    settings = _settings()
    rng = default_source(seed if seed is not None else settings.seed)
    engine = NarrativeEngine(settings.to_options(), rng=rng)
    outcome = engine.process(text)
    display = Display()
    if not outcome.combat_started:
        display.console.print("[dim]No combat start detected.[/dim]")
        return
    display.show_turn_tracker(engine.session)
    display.show_threat_details(engine.session)


@app.command()
def check(
    text: str = typer.Argument(..., help="Fragment containing skill check prompts"),
    score: list[str] = typer.Option([], "--score", "-s", help="Ability score, e.g. dex=14"),
    level: Optional[int] = typer.Option(None, "--level", "-l", help="Character level"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible rolls"),
) -> None:
    """Roll every skill check found in a fragment."""
    from narrative_engine.detection.scanner import TextSignalScanner
    from narrative_engine.resolution.skill_checks import SkillCheckResolver

    settings = _settings()
    character = CharacterProjection(ability_scores=_parse_scores(score), level=level)
    prompts = TextSignalScanner(settings.supports_bracket_notation).find_skill_checks(text)
    resolver = SkillCheckResolver(default_source(seed if seed is not None else settings.seed))
    display = Display()
    if not prompts:
        display.show_skill_checks(prompts)
        return
    for prompt in prompts:
        display.show_check_result(resolver.resolve(prompt, character))


@app.command()
def loot(
    text: str = typer.Argument(..., help="Post-combat fragment"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible rolls"),
) -> None:
    """List the items a fragment says were found."""
    from narrative_engine.generation.generator import ProceduralGenerator

    settings = _settings()
    generator = ProceduralGenerator(default_source(seed if seed is not None else settings.seed))
    Display().show_loot(generator.extract_loot_from_text(text))


@app.command()
def replay(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text file of fragments"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible rolls"),
    auto_resolve: bool = typer.Option(False, "--auto-resolve", help="Roll detected checks immediately"),
) -> None:
    """Feed blank-line separated fragments through one engine, in order."""
    from narrative_engine.engine.narrative_engine import NarrativeEngine
    from narrative_engine.engine.notifier import ContinueNotifier

    settings = _settings()
    if auto_resolve:
        settings.auto_resolve = True
    on_resolved = None
    if settings.auto_resolve and settings.notifier.route:
        on_resolved = ContinueNotifier(
            settings.notifier.base_url, settings.notifier.route, settings.notifier.timeout,
        )
    rng = default_source(seed if seed is not None else settings.seed)
    engine = NarrativeEngine(
        settings.to_options(on_resolved), rng=rng, party=[CharacterProjection()],
    )
    display = Display()

    fragments = [f.strip() for f in _FRAGMENT_SPLIT.split(path.read_text(encoding="utf-8")) if f.strip()]
    for i, fragment in enumerate(fragments, 1):
        display.console.rule(f"Fragment {i}")
        display.console.print(fragment, style="italic")
        outcome = engine.process(fragment)
        if outcome.combat_started:
            display.show_mentions(outcome.mentions)
        if outcome.combat_ended:
            display.show_loot(outcome.loot, title="Spoils")
        if outcome.skill_checks and not outcome.resolutions:
            display.show_skill_checks(outcome.skill_checks)
        for result in outcome.resolutions:
            display.show_check_result(result)
        display.show_turn_tracker(engine.session)


if __name__ == "__main__":
    app()
