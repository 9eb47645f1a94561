# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands to build the language ranking report and inspect sources and logging

from pathlib import Path

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from langrank.config import get_config
from langrank.core.pipeline import PipelineOutcome, RankingPipeline
from langrank.extraction.base import BrowserEngineError
from langrank.extraction.sources import SOURCES
from langrank.report.model import build_header
from langrank.report.renderer import PdfReportRenderer, RenderFailure
from langrank.utils.logging import (
    LoggingMode,
    configure_logging,
    create_smart_progress,
    get_logging_status,
    with_pipeline_context,
)
from langrank.utils.rich_tables import (
    create_logging_status_table,
    create_section_table,
    create_source_results_table,
    create_sources_table,
    print_rich_table,
)

console = Console()


def _write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def _display_outcome(outcome: PipelineOutcome, verbose: bool) -> None:
    print_rich_table(console, create_source_results_table(outcome.results))
    if verbose:
        for section in outcome.report.sections:
            print_rich_table(console, create_section_table(section))


@click.command()
@click.option("--output", "-o", type=click.Path(path_type=Path), help="PDF destination (defaults to config)")
@click.option("--model-json", type=click.Path(path_type=Path), help="Also write the report model as JSON")
@click.option("--title", help="Report title")
@click.option("--subtitle", help="Report subtitle")
@click.option("--no-logo", is_flag=True, help="Leave the logo out of the header")
@click.option("--no-date", is_flag=True, help="Leave the date out of the header")
@click.option("--verbose", "-v", is_flag=True, help="Print every comparison table")
@click.pass_context
async def report(
    ctx,
    output: Path | None,
    model_json: Path | None,
    title: str | None,
    subtitle: str | None,
    no_logo: bool,
    no_date: bool,
    verbose: bool,
):
    """
    📄 Scrape every ranking source and render the comparison report as a PDF.

    Sources that fail are reported and left out; their side of each table
    shows N/A. Nothing is written if the browser or the renderer fails.
    """
    json_output = ctx.obj["json_output"]
    config = get_config()
    output_path = output or config.output_path

    header = build_header(
        title=title or config.report_title,
        subtitle=subtitle or config.report_subtitle,
        show_logo=not no_logo,
        show_date=not no_date,
    )

    with with_pipeline_context("language_report", output=str(output_path)) as logger:
        logger.info("Starting report run", sources=len(SOURCES))

        if not json_output:
            console.print(
                Panel.fit(
                    f"📊 [bold cyan]{header.title}[/bold cyan]\n{header.subtitle}",
                    border_style="magenta",
                )
            )

        try:
            if json_output:
                outcome = await RankingPipeline(config=config, header=header).run()
            else:
                progress, _, tracker = create_smart_progress(console)
                with progress:
                    outcome = await RankingPipeline(config=config, header=header, progress=tracker).run()

            pdf_bytes = PdfReportRenderer(logo_path=config.logo_path).render(outcome.report)
        except (BrowserEngineError, RenderFailure) as e:
            logger.error("Report run failed", error=str(e), error_type=type(e).__name__)
            if not json_output:
                console.print(f"[red]❌ {e}[/red]")
            ctx.exit(1)

        _write_bytes(output_path, pdf_bytes)
        logger.info("PDF written", path=str(output_path), failed_sources=outcome.failed_sources)

        if model_json:
            _write_bytes(model_json, outcome.report.to_json().encode("utf-8"))
            logger.info("Report model written", path=str(model_json))

        if not json_output:
            _display_outcome(outcome, verbose)
            if outcome.failed_sources:
                console.print(f"[yellow]⚠️ Missing sources: {', '.join(outcome.failed_sources)}[/yellow]")
            console.print(f"✅ Report written to [bold green]{output_path}[/bold green]")


@click.command()
def sources():
    """
    🌐 List the ranking sources and how each is parsed.
    """
    print_rich_table(console, create_sources_table(SOURCES))


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    print_rich_table(console, create_logging_status_table(status))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    📊 Language Rankings - popularity, salaries and learning difficulty

    Collects programming language rankings from PYPL, TIOBE and four articles,
    lines them up side by side and renders a PDF report.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(report)
app.add_command(sources)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
