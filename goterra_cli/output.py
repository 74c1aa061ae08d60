"""Rendering of API results: tables for listings, YAML for single resources."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Sequence

import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text


def format_timestamp(ts: int) -> str:
    if not ts:
        return "-"
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


def format_cell(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    if value is None:
        return ""
    return str(value)


def to_yaml(data: Any) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


class Printer:
    """Writes command results to stdout, as tables/YAML or as JSON."""

    def __init__(
        self,
        json_output: bool = False,
        console: Console | None = None,
        err_console: Console | None = None,
    ):
        self.json_output = json_output
        # remote data is printed verbatim: no markup, no :emoji: codes
        self.console = console or Console(highlight=False, soft_wrap=True, markup=False, emoji=False)
        self.err_console = err_console or Console(
            stderr=True, highlight=False, soft_wrap=True, markup=False, emoji=False
        )

    def table(self, columns: Sequence[str], rows: Sequence[Sequence[Any]], raw: Any = None) -> None:
        """Print rows under columns; with --json, print raw (or the rows) instead."""
        if self.json_output:
            payload = raw if raw is not None else [dict(zip(columns, row)) for row in rows]
            self.json(payload)
            return
        table = Table(show_header=True, header_style="bold")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*(Text(format_cell(v)) for v in row))
        self.console.print(table)

    def resource(self, data: dict, id_field: str = "id") -> None:
        """Print one resource as 'id: X' followed by its YAML document."""
        if self.json_output:
            self.json(data)
            return
        if id_field in data:
            self.console.print(f"{id_field}: {data[id_field]}")
        self.yaml(data)

    def yaml(self, data: Any) -> None:
        if self.json_output:
            self.json(data)
            return
        self.write(to_yaml(data))

    def json(self, data: Any) -> None:
        self.console.print(json.dumps(data, indent=2, default=str))

    def text(self, message: str) -> None:
        self.console.print(message)

    def write(self, content: str) -> None:
        """Print content as is, without an added newline."""
        self.console.print(content, end="")

    def note(self, message: str) -> None:
        """Print an interactive hint on stderr, keeping stdout for results."""
        self.err_console.print(message)
