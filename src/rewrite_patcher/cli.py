"""
Command-line interface for the rewrite patcher.

Applies a JSON file of rewrite suggestions to an HTML document. This is a
developer tool around the engine; the editor calls the engine directly.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import PatchConfig
from .engine import PatchEngine
from .fragment_loader import FragmentLoadError, load_fragments
from .models import BatchOutcome

console = Console()


@click.command()
@click.option(
    "--document",
    "-d",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to the HTML document to patch.",
)
@click.option(
    "--fragments",
    "-f",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to a JSON file of {original, improved, explanation} suggestions.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the patched document. Defaults to stdout.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Disable the sentence-fragment and chunk fallbacks.",
)
@click.option(
    "--no-scrub",
    is_flag=True,
    default=False,
    help="Skip duplicate scrubbing after each patch.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def main(
    document: Path,
    fragments: Path,
    output: Optional[Path],
    strict: bool,
    no_scrub: bool,
    verbose: bool,
) -> None:
    """
    Rewrite Patcher - apply AI rewrite suggestions to an HTML document.

    Examples:

        rewrite-patch -d article.html -f suggestions.json -o patched.html

        rewrite-patch -d article.html -f suggestions.json --strict -v
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        fragment_list = load_fragments(fragments)
    except FragmentLoadError as e:
        console.print(f"[red]Fragment loading error:[/red] {e}")
        sys.exit(1)

    html = document.read_text(encoding="utf-8")

    config = PatchConfig.strict(scrub_enabled=not no_scrub) if strict else PatchConfig(scrub_enabled=not no_scrub)
    outcome = PatchEngine(config).apply_batch(html, fragment_list)

    if output:
        output.write_text(outcome.document, encoding="utf-8")
        _display_summary(outcome, verbose)
        console.print(f"\n[bold green]Done![/bold green] Output saved to: {output}")
    else:
        click.echo(outcome.document)

    if outcome.total and outcome.applied_count == 0:
        sys.exit(2)


def _display_summary(outcome: BatchOutcome, verbose: bool) -> None:
    """Display batch summary."""
    console.print(Panel.fit(
        f"[bold blue]Applied {outcome.applied_count} of {outcome.total} suggestions[/bold blue]",
        border_style="blue",
    ))

    table = Table(title="Suggestions", show_header=True)
    table.add_column("#", style="cyan")
    table.add_column("Original", style="white")
    table.add_column("Strategy", style="green")
    table.add_column("Confidence", style="yellow")

    for report in outcome.reports:
        original = report.fragment.original
        if not verbose and len(original) > 50:
            original = original[:47] + "..."
        table.add_row(
            str(report.index + 1),
            original,
            report.strategy.value if report.strategy else "[red]no match[/red]",
            f"{report.confidence:.2f}" if report.confidence is not None else "-",
        )

    console.print(table)
    console.print(f"[dim]Word count: {outcome.word_count}[/dim]")


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
