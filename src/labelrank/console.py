# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .schemas import PredictionResult


def format_percentage(value: float) -> str:
    if math.isnan(value):
        return "nan%"
    return f"{value:.2f}%"


@dataclass
class MLConsole:
    enabled: bool = True
    console: Console | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.console is None:
            self.console = Console(color_system="auto", soft_wrap=True, quiet=not self.enabled)

    def banner(self, title: str) -> None:
        self.console.print(Panel.fit(title, title="labelrank", border_style="cyan"))

    def info(self, text: str) -> None:
        self.console.print(f"[bold cyan]INFO[/bold cyan] {text}")

    def warn(self, text: str) -> None:
        self.console.print(f"[bold yellow]WARN[/bold yellow] {text}")

    def success(self, text: str) -> None:
        self.console.print(f"[bold green]OK[/bold green] {text}")

    def metrics_table(self, metrics: dict[str, Any], *, title: str) -> None:
        table = Table(title=title, show_lines=True)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        for key in sorted(metrics.keys()):
            value = metrics[key]
            table.add_row(key, f"{value:.4f}" if isinstance(value, float) else str(value))
        self.console.print(table)

    def prediction_report(self, results: Iterable[PredictionResult]) -> None:
        for result in results:
            table = Table(show_header=True, header_style="bold", title="Predicted Features")
            table.add_column("Feature")
            table.add_column("Score", justify="right")
            table.add_column("Share", justify="right")
            for prediction in result.predictions:
                table.add_row(prediction.feature, f"{prediction.score:.7f}", format_percentage(prediction.percentage))
            body = Table.grid(padding=(0, 1))
            body.add_row("[bold]Label:[/bold]", result.label)
            body.add_row("[bold]Features:[/bold]", ", ".join(result.features))
            self.console.print(Panel(body, border_style="cyan"))
            self.console.print(table)
