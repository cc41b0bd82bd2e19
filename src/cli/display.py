"""Display components for CLI using Rich."""

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from src.core.logger.logger import get_console
from src.models.build import PipelineReport


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console = get_console()
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_note(message: str) -> None:
    """Display an informational note."""
    get_console().print(f"[yellow]{escape(message)}[/]")


def show_build_result(report: PipelineReport) -> None:
    """Display the stages that ran and the artifacts they produced.

    Args:
        report: Report of a completed pipeline run.
    """
    console = get_console()
    console.print()
    table = Table(title="[bold]Build Result[/]", show_header=True, box=None)
    table.add_column("Stage", style="cyan")
    table.add_column("Program", style="white")
    table.add_column("Output", style="green")

    for stage in report.stages:
        output = str(stage.output_artifact) if stage.output_artifact else "-"
        table.add_row(stage.kind.value, escape(stage.program.name), escape(output))

    if report.program_name:
        table.add_section()
        table.add_row("program", escape(report.program_name), "")

    console.print(Panel(table, border_style="green"))
    for note in report.notes:
        show_note(note)
