# ABOUTME: Rich table builders for CLI summaries of sources, run outcomes and comparison tables
# ABOUTME: Keeps console formatting out of the pipeline and report modules

from collections.abc import Sequence
from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table

from langrank.core.models import SourceFailure, SourceSuccess
from langrank.extraction.sources import SourceDescriptor
from langrank.report.model import ReportSection


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a key-value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping.

    Args:
        title: Table title with emoji/styling
        columns: List of (column_name, column_style) tuples
        rows: List of row data
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles for zebra striping
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def create_sources_table(descriptors: Sequence[SourceDescriptor]) -> Table:
    """List the configured ranking sources and how each one is parsed."""
    rows = [
        [
            descriptor.source_id,
            descriptor.display_name,
            descriptor.strategy.kind,
            descriptor.ready_selector,
            str(descriptor.top_n) if descriptor.top_n is not None else "all",
            "yes" if descriptor.reverse else "no",
            descriptor.url,
        ]
        for descriptor in descriptors
    ]
    return create_multi_column_table(
        title="🌐 Ranking Sources",
        columns=[
            ("ID", "bold blue"),
            ("Name", "white"),
            ("Strategy", "cyan"),
            ("Ready When", "cyan"),
            ("Top N", "green"),
            ("Reversed", "green"),
            ("URL", "dim"),
        ],
        rows=rows,
    )


def create_source_results_table(results: Sequence[SourceSuccess | SourceFailure]) -> Table:
    """Summarise the outcome of every source in a run."""
    rows = []
    for result in results:
        if isinstance(result, SourceSuccess):
            outcome, detail = "✅ OK", f"{len(result.entries)} entries"
        else:
            outcome, detail = "❌ Failed", f"{result.error_type}: {result.cause}"
        rows.append([result.source_id, outcome, detail, f"{result.duration_seconds:.1f}s"])

    return create_multi_column_table(
        title="📊 Source Results",
        columns=[("Source", "bold blue"), ("Outcome", "white"), ("Detail", "white"), ("Duration", "dim")],
        rows=rows,
    )


def create_section_table(section: ReportSection) -> Table:
    """Render one comparison section the way it appears in the PDF."""
    label_a, label_b = section.column_labels
    return create_multi_column_table(
        title=f"🏆 {section.heading}",
        columns=[("Position", "bold blue"), (label_a, "green"), (label_b, "yellow")],
        rows=[[str(row.position), row.column_a, row.column_b] for row in section.rows],
        box_style=SIMPLE,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing and style.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()
    console.print(table)
    console.print()
