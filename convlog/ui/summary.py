"""Rich rendering of a converted game."""

from collections import Counter

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from convlog.engine.convert import ConvertResult
from convlog.engine.event import (
    KAN_EVENTS, CallEvent, Hora, Reach, Ryukyoku,
)
from convlog.tenhou.log import Log


def _outcome(events) -> str:
    hora = [e for e in events if isinstance(e, Hora)]
    if hora:
        return ", ".join(
            f"P{e.actor} tsumo" if e.actor == e.target else f"P{e.actor} ron P{e.target}"
            for e in hora
        )
    if any(isinstance(e, Ryukyoku) for e in events):
        return "ryukyoku"
    return "?"


def render_summary(console: Console, log: Log, result: ConvertResult):
    """Render one row per converted kyoku, then the skipped ones."""
    console.print(Panel(
        " / ".join(escape(name) or f"P{i}" for i, name in enumerate(log.names)),
        title="[bold]convlog[/bold]",
        border_style="cyan",
    ))

    table = Table(title="Kyoku", border_style="cyan")
    table.add_column("Kyoku", style="bold")
    table.add_column("Events", justify="right")
    table.add_column("Calls", justify="right")
    table.add_column("Kans", justify="right")
    table.add_column("Reach", justify="right")
    table.add_column("Result")

    for label, events in result.kyoku_events:
        kinds = Counter(type(e) for e in events)
        calls = sum(n for cls, n in kinds.items() if issubclass(cls, CallEvent))
        kans = sum(n for cls, n in kinds.items() if issubclass(cls, KAN_EVENTS))
        table.add_row(
            label,
            str(len(events)),
            str(calls),
            str(kans),
            str(kinds[Reach]),
            _outcome(events),
        )

    for label, error in result.skipped:
        table.add_row(label, "-", "-", "-", "-", f"[red]{escape(str(error))}[/red]", style="dim")

    console.print(table)
    console.print(f"  {len(result.events)} events, {len(result.skipped)} kyoku skipped")
