"""
Rendering functions for commitbump output.

This module handles all pretty-printing and table formatting.
Services return data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from rich.markup import escape
from typing import Optional

from .domain.release import ReleaseType
from .services.analysis_service import AnalysisResult

console = Console()

RELEASE_TYPE_STYLES = {
    ReleaseType.MAJOR: "bold red",
    ReleaseType.MINOR: "bold yellow",
    ReleaseType.PATCH: "bold green",
    ReleaseType.NONE: "dim",
}


def render_analysis(result: AnalysisResult, target: Optional[Console] = None) -> None:
    """
    Render an analysis result as a commit table plus a summary line.

    Args:
        result: Analysis result to display
        target: Console to print to (module console if None)
    """
    out = target or console

    since = escape(result.last_tag.name) if result.last_tag else "beginning of history"
    if not result.commits:
        out.print(f"[yellow]No commits since {since}.[/yellow]")
    else:
        table = Table(
            title=f"Commits since {since}",
            box=box.ROUNDED,
            show_header=True,
            header_style="bold magenta"
        )
        table.add_column("Commit", style="cyan", no_wrap=True)
        table.add_column("Subject")
        table.add_column("Release", no_wrap=True)
        table.add_column("Rule", style="dim", no_wrap=True)

        by_id = {c.commit_id: c for c in result.classifications}
        for commit in result.commits:
            classification = by_id.get(commit.id)
            if classification:
                style = RELEASE_TYPE_STYLES[classification.release_type]
                release = f"[{style}]{classification.release_type.label}[/{style}]"
                rule = classification.rule
            else:
                release, rule = "", ""
            table.add_row(commit.short_id, escape(commit.subject), release, rule)

        out.print(table)

    style = RELEASE_TYPE_STYLES[result.release_type]
    out.print(
        f"Release type: [{style}]{result.release_type.label}[/{style}]  "
        f"Next version: [bold]{result.next_version}[/bold]"
    )
