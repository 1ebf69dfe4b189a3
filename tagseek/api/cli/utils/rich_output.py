"""Rich-based output formatting utilities for TagSeek CLI commands."""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from tagseek.core.models import SymbolCatalog


class RichOutputFormatter:
    """Terminal UI formatter using Rich library."""

    def __init__(self, verbose: bool = False, console: Console | None = None):
        """Initialize Rich output formatter.

        Args:
            verbose: Whether to enable verbose output
            console: Console to write to (defaults to stdout)
        """
        self.verbose = verbose
        self.console = console or Console()

    def info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[blue][INFO][/blue] {message}")

    def success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green][SUCCESS][/green] {message}")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow][WARN][/yellow] {message}")

    def error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red][ERROR][/red] {message}", style="red")

    def verbose_info(self, message: str) -> None:
        """Print a verbose info message if verbose mode is enabled."""
        if self.verbose:
            self.console.print(f"[cyan][DEBUG][/cyan] {message}")

    def startup_info(self, version: str, directory: Path, model: str | None) -> None:
        """Display startup information in a styled panel."""
        info_table = Table.grid(padding=(0, 2))
        info_table.add_column(style="cyan")
        info_table.add_column()

        info_table.add_row("Version:", f"[green]{version}[/green]")
        info_table.add_row("Repository:", f"[blue]{directory}[/blue]")
        if model:
            info_table.add_row("Model:", f"[yellow]{model}[/yellow]")

        panel = Panel(
            info_table,
            title="[bold cyan]TagSeek[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
        self.console.print(panel)

    def stream_content(self, chunk: str) -> None:
        """Echo streamed assistant text without markup or line breaks."""
        self.console.print(chunk, end="", markup=False, highlight=False)

    def end_stream(self) -> None:
        self.console.print()

    def answer(self, paths: list[Path] | None) -> None:
        """Show the files the agent reported."""
        if not paths:
            self.warning("No matching files found")
            return
        self.success(f"Found {len(paths)} file(s):")
        for path in paths:
            self.console.print(f"  [bold]{path}[/bold]", highlight=False)

    def tags_table(self, catalog: SymbolCatalog, title: str = "Tags") -> None:
        """Display tag records as a table."""
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Name", style="cyan")
        table.add_column("Kind", style="yellow")
        table.add_column("Path", style="blue")
        table.add_column("Line", justify="right", style="green")

        for record in catalog:
            kind = getattr(record, "kind", "")
            line = getattr(record, "line", None)
            table.add_row(
                record.name,
                kind,
                str(record.path),
                "" if line is None else str(line),
            )

        self.console.print(table)

    def slices_table(self, rows: list[tuple[int, int, int]], max_tokens: int) -> None:
        """Display (index, records, tokens) rows for a slicing run."""
        table = Table(
            title=f"Slices (ceiling {max_tokens} tokens)",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Slice", justify="right", style="cyan")
        table.add_column("Records", justify="right", style="green")
        table.add_column("Tokens", justify="right", style="yellow")

        for index, count, tokens in rows:
            style = "red" if tokens > max_tokens else ""
            table.add_row(str(index), str(count), str(tokens), style=style)

        self.console.print(table)

    def usage_summary(self, stats: dict[str, Any]) -> None:
        """Display LLM usage in a styled panel."""
        summary_table = Table.grid(padding=(0, 2))
        summary_table.add_column(style="cyan")
        summary_table.add_column()

        summary_table.add_row("Requests:", f"[green]{stats.get('requests_made', 0)}[/green]")
        summary_table.add_row("Prompt tokens:", f"[blue]{stats.get('prompt_tokens', 0)}[/blue]")
        summary_table.add_row(
            "Completion tokens:", f"[blue]{stats.get('completion_tokens', 0)}[/blue]"
        )
        summary_table.add_row("Total tokens:", f"[magenta]{stats.get('total_tokens', 0)}[/magenta]")

        panel = Panel(
            summary_table,
            title="[bold green]LLM Usage[/bold green]",
            border_style="green",
            padding=(1, 2),
        )
        self.console.print(panel)

    def create_progress(self) -> Progress:
        """Progress bar for record-counting work such as slicing."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn("•"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
