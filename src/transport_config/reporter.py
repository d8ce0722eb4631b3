from __future__ import annotations
from typing import Any, Dict

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from .models import Section, Source


class Reporter:
    def __init__(self, console: Console) -> None:
        self.console = console

    def section(self, section: Section) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Setting", style="bold")
        table.add_column("Value")
        table.add_column("Source", width=9)
        for r in section.rows:
            style = "yellow" if r.source == Source.OVERRIDE else ("cyan" if r.source == Source.PROPERTY else "")
            table.add_row(r.name, r.display_value(), Text(r.source.value, style=style))
        if not section.rows:
            table.add_row("-", "-", "-")
        self.console.print(Panel.fit(table, title=Text(section.title, style="bold blue")))

    def summary(self, sections: list[Section]) -> None:
        overrides = sum(s.count(Source.OVERRIDE) for s in sections)
        props = sum(s.count(Source.PROPERTY) for s in sections)
        self.console.print(f"[bold]Summary:[/bold] overrides {overrides} • properties {props}")

    def options(self, kwargs: Dict[str, Any]) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Option", style="bold")
        table.add_column("Value")
        for k, v in kwargs.items():
            table.add_row(k, repr(v))
        self.console.print(Panel.fit(table, title=Text("httpx client options", style="bold blue")))
