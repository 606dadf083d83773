"""Report formatting utilities."""
from __future__ import annotations

import json
from typing import Literal

from rich.markup import escape

OutputFormat = Literal["cli", "json", "markdown"]

_GRADE_COLORS = {"A": "green", "B": "blue", "C": "yellow", "D": "red", "F": "red bold"}
_STATUS_MARKS = {
    "good": ("[green]✓[/green]", "✅"),
    "warning": ("[yellow]![/yellow]", "⚠️"),
    "critical": ("[red]✗[/red]", "❌"),
    "info": ("[blue]i[/blue]", "ℹ️"),
    "unknown": ("[dim]?[/dim]", "❓"),
}
_PRIORITY_COLORS = {"Critical": "red", "High": "yellow", "Medium": "blue", "Low": "white"}


def format_report(result: dict, output: OutputFormat = "cli") -> str:
    """Format an audit result for output.

    Args:
        result: AuditResult.to_dict() output
        output: Output format - 'cli', 'json', or 'markdown'

    Returns:
        Formatted string representation of the audit
    """
    if output == "json":
        return _format_json(result)
    elif output == "markdown":
        return _format_markdown(result)
    else:
        return _format_cli(result)


def _format_json(result: dict) -> str:
    return json.dumps(result, ensure_ascii=False, indent=2, default=str)


def _category_label(key: str) -> str:
    return key.replace("_", " ").title()


def _signal_label(signal: dict) -> str:
    status = signal.get("status", "unknown").capitalize()
    detail = signal.get("detail")
    return f"{status} ({detail})" if detail else status


def _score_color(score: int) -> str:
    if score >= 75:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def _format_cli(result: dict) -> str:
    """Format results for terminal display with Rich-compatible markup."""
    lines = []

    if not result.get("success", True):
        lines.append("[bold red]Audit failed[/bold red]")
        lines.append(f"[dim]URL:[/dim] {escape(result.get('url', ''))}")
        lines.append(f"[red]{escape(result.get('error') or 'Unknown error')}[/red]")
        return "\n".join(lines)

    title = result.get("categories", {}).get("metadata", {}).get("facts", {}).get("title") or "Untitled Page"
    if len(title) > 60:
        title = title[:57] + "..."
    lines.append("[bold cyan]SEO Audit Report[/bold cyan]")
    lines.append(f"[dim]Page:[/dim] {escape(title)}")
    lines.append(f"[dim]URL:[/dim] {escape(result.get('url', ''))}")
    lines.append("")

    total = result.get("overall_score", 0)
    grade = result.get("grade", "F")
    grade_color = _GRADE_COLORS.get(grade, "white")
    lines.append(f"[bold]SEO Score:[/bold] [{grade_color}]{total}/100 ({grade})[/{grade_color}]")
    lines.append("")

    lines.append("[bold]Category Scores:[/bold]")
    for key, score in result.get("category_scores", {}).items():
        bar_width = 20
        filled = int(bar_width * score / 100)
        bar = "█" * filled + "░" * (bar_width - filled)
        color = _score_color(score)
        lines.append(f"  {_category_label(key):18} [{color}]{bar}[/{color}] {score}/100")
    lines.append("")

    problems = []
    for key, report in result.get("categories", {}).items():
        for signal in report.get("signals", []):
            if signal.get("status") in ("critical", "warning"):
                problems.append((key, signal))
    problems.sort(key=lambda item: item[1].get("status") != "critical")
    if problems:
        lines.append("[bold]Issues:[/bold]")
        for key, signal in problems:
            mark = _STATUS_MARKS[signal["status"]][0]
            name = signal.get("name", "").replace("_", " ")
            lines.append(f"  {mark} {_category_label(key)} / {name}: {_signal_label(signal)}")
        lines.append("")

    recommendations = result.get("recommendations", [])
    if recommendations:
        lines.append("[bold]Recommended Fixes:[/bold]")
        for i, rec in enumerate(recommendations, 1):
            priority = rec.get("priority", "Low")
            color = _PRIORITY_COLORS.get(priority, "white")
            lines.append(f"  {i}. [{color}]\\[{priority}][/{color}] {escape(rec.get('message', ''))} (impact: {rec.get('impact_score')})")
            lines.append(f"     [dim]{escape(rec.get('actionable_advice', ''))}[/dim]")
    else:
        lines.append("[green]No recommendations - nice work.[/green]")

    return "\n".join(lines)


def _format_markdown(result: dict) -> str:
    """Format results as Markdown."""
    lines = []
    url = result.get("url", "")
    lines.append("# SEO Audit Report")
    lines.append("")
    if url:
        lines.append(f"**URL:** {url}")
    if result.get("audited_at"):
        lines.append(f"**Audited:** {result['audited_at']}")
    lines.append("")

    if not result.get("success", True):
        lines.append("## Audit Failed")
        lines.append("")
        lines.append(result.get("error") or "Unknown error")
        return "\n".join(lines)

    lines.append("## SEO Score")
    lines.append("")
    lines.append(f"**{result.get('overall_score', 0)}/100** ({result.get('grade', 'F')})")
    lines.append("")

    lines.append("### Category Scores")
    lines.append("")
    lines.append("| Category | Score |")
    lines.append("|----------|-------|")
    for key, score in result.get("category_scores", {}).items():
        lines.append(f"| {_category_label(key)} | {score} |")
    lines.append("")

    lines.append("## Signals")
    lines.append("")
    for key, report in result.get("categories", {}).items():
        signals = report.get("signals", [])
        if not signals:
            continue
        lines.append(f"### {_category_label(key)}")
        lines.append("")
        lines.append("| Signal | Status |")
        lines.append("|--------|--------|")
        for signal in signals:
            mark = _STATUS_MARKS.get(signal.get("status"), _STATUS_MARKS["unknown"])[1]
            name = signal.get("name", "").replace("_", " ").capitalize()
            lines.append(f"| {name} | {mark} {_signal_label(signal)} |")
        lines.append("")

    recommendations = result.get("recommendations", [])
    if recommendations:
        lines.append("## Recommended Fixes")
        lines.append("")
        for i, rec in enumerate(recommendations, 1):
            priority = rec.get("priority", "Low")
            lines.append(
                f"{i}. **[{priority.upper()}]** {rec.get('message')} "
                f"_(impact: {rec.get('impact_score')})_"
            )
            lines.append(f"   - {rec.get('actionable_advice')}")
        lines.append("")

    return "\n".join(lines)
