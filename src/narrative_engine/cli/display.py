"""Rich rendering of scans, check results, loot and the turn tracker."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from narrative_engine.mechanics.conditions import is_incapacitated
from narrative_engine.mechanics.skills import display_name
from narrative_engine.models.combat import CombatParticipant, CombatSession
from narrative_engine.models.loot import LootItem
from narrative_engine.models.signals import CombatSignal, EntityMention
from narrative_engine.models.skill_check import CheckResult, SkillCheckPrompt

console = Console()

_CONDITION_COLORS = {
    "poisoned": "green", "stunned": "yellow", "frightened": "magenta",
    "paralyzed": "red", "prone": "dark_orange", "blinded": "dim",
}
_RARITY_COLORS = {"common": "white", "uncommon": "green", "rare": "blue"}


def _hp_bar(current: int, maximum: int, width: int = 12) -> str:
    pct = max(0.0, current / maximum) if maximum > 0 else 0.0
    filled = int(pct * width)
    if pct > 0.5:
        color = "green"
    elif pct > 0.25:
        color = "yellow"
    else:
        color = "red"
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"


class Display:
    def __init__(self, console_: Console | None = None) -> None:
        self.console = console_ or console

    def show_signal(self, signal: CombatSignal) -> None:
        start = "[bold red]yes[/bold red]" if signal.starts_combat else "[dim]no[/dim]"
        end = "[bold green]yes[/bold green]" if signal.ends_combat else "[dim]no[/dim]"
        self.console.print(f"[bold]Starts combat:[/bold] {start}   [bold]Ends combat:[/bold] {end}")

    def show_skill_checks(self, prompts: list[SkillCheckPrompt]) -> None:
        if not prompts:
            self.console.print("[dim]No skill checks detected.[/dim]")
            return
        table = Table(title="Skill Checks", box=box.ROUNDED)
        table.add_column("Check", style="cyan")
        table.add_column("DC", justify="right")
        table.add_column("Kind")
        table.add_column("Source text", style="dim")
        for p in prompts:
            dc = str(p.difficulty_class) if p.difficulty_class is not None else "-"
            table.add_row(display_name(p.skill_or_ability), dc, p.kind.value.replace("_", " "), p.source_text)
        self.console.print(table)

    def show_mentions(self, mentions: list[EntityMention]) -> None:
        if not mentions:
            self.console.print("[dim]No hostile creatures mentioned.[/dim]")
            return
        parts = []
        for m in mentions:
            color = "red" if m.type_key else "magenta"
            parts.append(f"[{color}]{m.name}[/{color}]")
        self.console.print(f"[bold]Creatures:[/bold] {', '.join(parts)}")

    def show_check_result(self, result: CheckResult) -> None:
        name = display_name(result.skill_or_ability)
        sign = "+" if result.modifier >= 0 else "-"
        line = f"{name} check: {result.roll} {sign} {abs(result.modifier)} = {result.total}"
        if result.success is None:
            self.console.print(f"[bold]Skill Check Result[/bold]  {line}")
            return
        verdict = "[bold green]Success![/bold green]" if result.success else "[bold red]Failure[/bold red]"
        self.console.print(f"{verdict}  {line} vs DC {result.difficulty_class}")

    def show_loot(self, items: list[LootItem], title: str = "Loot") -> None:
        if not items:
            self.console.print("[dim]No loot found.[/dim]")
            return
        table = Table(title=title, box=box.ROUNDED)
        table.add_column("Item")
        table.add_column("Category")
        table.add_column("Qty", justify="right")
        table.add_column("Value (gp)", justify="right")
        table.add_column("Rarity")
        for item in items:
            rarity = item.rarity or "common"
            color = _RARITY_COLORS.get(rarity, "white")
            name = f"{item.name} ✦" if item.is_magical else item.name
            table.add_row(
                name, item.category.value, str(item.quantity),
                str(item.value) if item.value is not None else "-",
                f"[{color}]{rarity}[/{color}]",
            )
        self.console.print(table)

    def show_turn_tracker(self, session: CombatSession) -> None:
        if not session.in_combat:
            self.console.print("[dim]Not in combat.[/dim]")
            return
        table = Table(box=box.SIMPLE_HEAVY, show_header=True)
        table.add_column("", width=2)
        table.add_column("Init", justify="right")
        table.add_column("Name")
        table.add_column("HP")
        table.add_column("AC", justify="right")
        table.add_column("Conditions")
        for p in session.participants:
            table.add_row(*self._participant_row(p))
        self.console.print(Panel(
            table,
            title=f"[bold yellow]Round {session.round}[/bold yellow]",
            border_style="red",
            box=box.HEAVY,
        ))

    def _participant_row(self, p: CombatParticipant) -> list[str]:
        marker = "[bold yellow]▶[/bold yellow]" if p.is_active else ""
        color = "red" if p.is_hostile else "green"
        name = f"[{color}]{p.name}[/{color}]"
        if is_incapacitated(p.conditions) or p.hp == 0:
            name = f"[dim strike]{p.name}[/dim strike]"
        hp = f"{_hp_bar(p.hp, p.max_hp)} {p.hp}/{p.max_hp}"
        conditions = " ".join(
            f"[{_CONDITION_COLORS.get(c, 'cyan')}]{c}[/{_CONDITION_COLORS.get(c, 'cyan')}]"
            for c in p.conditions
        )
        ac = str(p.armor_class) if p.armor_class is not None else "-"
        return [marker, str(p.initiative), name, hp, ac, conditions]

    def show_threat_details(self, session: CombatSession) -> None:
        for p in session.participants:
            if not p.is_hostile:
                continue
            text = Text(p.description or p.name)
            self.console.print(Panel(text, title=f"[red]{p.name}[/red]", border_style="dim"))
