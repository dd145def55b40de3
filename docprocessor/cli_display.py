"""Console rendering helpers for the docprocessor CLI."""
from __future__ import annotations

from typing import Any, Dict, Optional

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text

from .models import SubmissionOutcome, SubmissionRequest
from .services.projector import FileResultView, ResultsView

console = Console()


def render_configuration_summary(config: Dict[str, Any], out: Optional[Console] = None) -> None:
    """Render startup configuration summary."""
    out = out or console
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white")

    for key, value in config.items():
        rendered = "-" if value is None else str(value)
        table.add_row(key, escape(rendered))

    panel = Panel(
        table,
        title="[bold green]docproc[/bold green]",
        subtitle="[dim]document processor client[/dim]",
        border_style="blue",
    )
    out.print(panel)


def _file_panel(view: FileResultView) -> Panel:
    sections = [
        Text("Extracted Text (OCR):", style="bold"),
        Text(view.extracted_text),
        Text(""),
        Text(f"AI-Generated Prompt ({view.prompt_label}):", style="bold"),
        Text(view.prompt, style="cyan"),
        Text(""),
        Text("Extracted Key-Value Pairs:", style="bold"),
        Text(view.key_values_text, style="green"),
    ]
    return Panel(Group(*sections), title=Text(view.file_name, style="bold"), border_style="white")


def render_results(view: ResultsView, out: Optional[Console] = None) -> None:
    out = out or console
    out.print(Text(f'Results for Document Type: "{view.document_type}"', style="bold green"))
    for file_view in view.files:
        out.print(_file_panel(file_view))


def render_error(message: str, out: Optional[Console] = None) -> None:
    out = out or console
    out.print(Text(message, style="bold red"))


class SubmissionStatusDisplay:
    """Event-based spinner shown while a submission is in flight."""

    def __init__(self, out: Optional[Console] = None):
        self._console = out or console
        self._status: Optional[Status] = None

    def on_submit_started(self, request: SubmissionRequest) -> None:
        label = f"Processing {len(request.files)} file(s) as {request.document_type!r}..."
        self._status = self._console.status(escape(label), spinner="dots")
        self._status.start()

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def on_submit_succeeded(self, outcome: SubmissionOutcome) -> None:
        self._stop()
        self._console.print(f"[green]Processed:[/green] {len(outcome.results)} file(s)")

    def on_submit_failed(self, outcome: SubmissionOutcome) -> None:
        self._stop()
