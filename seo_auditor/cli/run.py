"""CLI commands."""
from __future__ import annotations

import logging
from pathlib import Path

import requests
import typer
from rich.console import Console
from rich.panel import Panel

from seo_auditor import __version__
from seo_auditor.auditor import AuditResult, audit_html
from seo_auditor.fetcher.html_fetcher import fetch_page
from seo_auditor.report.formatter import OutputFormat, format_report

app = typer.Typer(
    add_completion=False,
    help="SEO Auditor - Score a web page's on-page SEO and suggest fixes",
)
console = Console()

_FAILING_GRADES = ("D", "F")
_GRADE_COLORS = {"A": "green", "B": "blue", "C": "yellow", "D": "red", "F": "red"}


def _validate_output(output: str) -> OutputFormat:
    if output not in ("cli", "json", "markdown"):
        console.print(f"[red]Error:[/red] Invalid output format '{output}'. Use cli, json, or markdown.")
        raise typer.Exit(1)
    return output  # type: ignore[return-value]


def _emit(result: AuditResult, output_format: OutputFormat, save: str | None) -> None:
    report = format_report(result.to_dict(), output_format)
    if save:
        save_path = Path(save)
        save_path.write_text(report, encoding="utf-8")
        console.print(f"\n[green]Report saved to:[/green] {save_path}")
    else:
        console.print("")
        if output_format == "cli":
            console.print(report)
        else:
            console.print(report, markup=False, highlight=False, soft_wrap=True)


def _exit_code(result: AuditResult) -> int:
    if not result.success or result.grade in _FAILING_GRADES:
        return 1
    return 0


@app.command()
def run(
    target: str = typer.Argument(..., help="URL to audit"),
    output: str = typer.Option(
        "cli",
        "--output",
        "-o",
        help="Output format: cli, json, markdown",
    ),
    save: str | None = typer.Option(
        None,
        "--save",
        "-s",
        help="Save report to file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show fetch details and debug logging",
    ),
) -> None:
    """Fetch a URL and audit it.

    Examples:
        seo-auditor run https://example.com
        seo-auditor run https://example.com -o json
        seo-auditor run https://example.com -o markdown -s report.md
    """
    output_format = _validate_output(output)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    console.print(Panel.fit(
        f"[bold cyan]SEO Auditor[/bold cyan]\n[dim]Auditing:[/dim] {target}",
        border_style="cyan",
    ))

    try:
        with console.status("[bold blue]Fetching page...", spinner="dots"):
            page = fetch_page(target)
    except ValueError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except requests.RequestException as e:
        console.print(f"\n[red]Fetch failed:[/red] {e}")
        raise typer.Exit(1)

    if verbose:
        console.print(
            f"[dim]Fetched {len(page.html):,} chars from {page.final_url} "
            f"(HTTP {page.status_code}, {page.load_time_seconds}s)[/dim]"
        )

    with console.status("[bold blue]Running SEO audit...", spinner="dots"):
        result = audit_html(page.final_url, page.html, page.headers, page.load_time_seconds)

    _emit(result, output_format, save)
    raise typer.Exit(_exit_code(result))


@app.command()
def file(
    path: Path = typer.Argument(..., help="Local HTML file to audit"),
    url: str = typer.Option(..., "--url", "-u", help="URL the HTML is published at"),
    output: str = typer.Option(
        "cli",
        "--output",
        "-o",
        help="Output format: cli, json, markdown",
    ),
    save: str | None = typer.Option(
        None,
        "--save",
        "-s",
        help="Save report to file",
    ),
) -> None:
    """Audit a saved HTML file without touching the network.

    Example:
        seo-auditor file page.html --url https://example.com/page
    """
    output_format = _validate_output(output)
    if not path.is_file():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)

    html = path.read_text(encoding="utf-8", errors="replace")
    result = audit_html(url, html)
    _emit(result, output_format, save)
    raise typer.Exit(_exit_code(result))


@app.command()
def check(
    target: str = typer.Argument(..., help="URL to quick-check"),
) -> None:
    """Quick check - prints only the SEO score and grade.

    Example:
        seo-auditor check https://example.com
    """
    try:
        with console.status("[bold blue]Auditing...", spinner="dots"):
            page = fetch_page(target)
            result = audit_html(page.final_url, page.html, page.headers, page.load_time_seconds)
    except (ValueError, requests.RequestException) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not result.success:
        console.print(f"[red]Error:[/red] {result.error}")
        raise typer.Exit(1)

    color = _GRADE_COLORS.get(result.grade, "white")
    console.print(f"[{color}]{result.grade}[/{color}] ({result.overall_score}/100) - {target}")
    raise typer.Exit(_exit_code(result))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]SEO Auditor[/bold] v{__version__}")
    console.print("[dim]On-page SEO audit and scoring engine[/dim]")


if __name__ == "__main__":
    app()
