"""Main CLI application for a11y-audit."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..adapters.playwright_adapter import PlaywrightAdapter
from ..config import get_settings
from ..logging import get_logger, setup_logging
from ..models.audits import AuditConfig, AuditRequest
from ..models.reports import AccessibilityReport
from ..orchestrator.pipeline import AccessibilityAuditPipeline
from ..orchestrator.validators import parse_urls
from ..reporting.exporters import EXPORTERS
from ..reporting.formatter import format_accessibility_report, generate_recommendation
from ..standards import (
    SECTION_508_PROVISIONS,
    get_rule_mapping,
    get_section508_for_rule,
    get_wcag_for_rule,
)

app = typer.Typer(
    name="a11y-audit",
    help="Automated WCAG 2.x AA and Section 508 accessibility audits",
    add_completion=False
)

console = Console()
logger = get_logger(__name__)

FORMATS = ("markdown", *EXPORTERS.keys())

_STATUS_STYLE = {
    'Pass': 'green',
    'Conditional Pass': 'yellow',
    'Fail': 'red',
}

_IMPACT_STYLE = {
    'critical': 'red',
    'serious': 'yellow',
    'moderate': 'blue',
    'minor': 'green',
}


@app.command()
def audit(
    urls: List[str] = typer.Argument(..., help="URLs to audit"),
    max_pages: Optional[int] = typer.Option(
        None, "--max-pages", "-m", help="Maximum pages to scan"
    ),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", "-t", help="Page navigation timeout in milliseconds"
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", "-x", help="Glob pattern of URLs to skip (repeatable)"
    ),
    screenshots: bool = typer.Option(
        False, "--screenshots", help="Capture a screenshot of each page"
    ),
    output_format: str = typer.Option(
        "markdown", "--format", "-f", help=f"Report format: {', '.join(FORMATS)}"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the report to this file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
) -> None:
    """Run a full accessibility audit."""
    if verbose:
        setup_logging("DEBUG")

    if output_format not in FORMATS:
        console.print(f"[red]Unknown format '{output_format}'. Choose one of: {', '.join(FORMATS)}[/red]")
        raise typer.Exit(1)

    request = AuditRequest(
        urls=list(urls),
        config=AuditConfig(
            max_pages=max_pages,
            timeout=timeout,
            include_screenshots=screenshots,
            exclude_patterns=list(exclude or []),
        ),
    )

    console.print(f"[bold blue]a11y-audit[/bold blue] - Accessibility Audit")
    console.print(f"URLs: {', '.join(urls)}")
    console.print()

    asyncio.run(_run_audit(request, output_format, output))


@app.command()
def parse(
    text: str = typer.Argument(..., help="Newline- or comma-separated URLs"),
) -> None:
    """Show which URLs in free text would be audited."""
    urls = parse_urls(text)

    if not urls:
        console.print("[yellow]No valid URLs found.[/yellow]")
        raise typer.Exit(1)

    for url in urls:
        console.print(f"✅ {url}")


@app.command()
def rule(
    rule_id: str = typer.Argument(..., help="axe-core rule id, e.g. image-alt"),
) -> None:
    """Show the WCAG criteria and Section 508 provisions for a rule."""
    if get_rule_mapping(rule_id) is None:
        console.print(f"[yellow]No standards mapping for rule '{rule_id}'.[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"Standards for {rule_id}")
    table.add_column("Standard", style="cyan")
    table.add_column("Reference", style="green")
    table.add_column("Title", style="white")

    for criterion in get_wcag_for_rule(rule_id):
        table.add_row(f"WCAG {criterion.level}", criterion.id, criterion.title)
    for provision in get_section508_for_rule(rule_id):
        table.add_row("Section 508", provision, SECTION_508_PROVISIONS.get(provision, ""))

    console.print(table)


@app.command()
def health() -> None:
    """Check whether accessibility scanning is available."""
    console.print(f"[bold blue]a11y-audit[/bold blue] - Health Check")
    console.print()

    asyncio.run(_check_health())


async def _run_audit(request: AuditRequest, output_format: str, output: Optional[Path]) -> None:
    """Run the audit pipeline and render the result."""
    try:
        pipeline = AccessibilityAuditPipeline()
        report = await pipeline.run_audit(request)
    except Exception as e:
        console.print(f"[red]Audit failed: {e}[/red]")
        logger.error("Audit execution failed", error=str(e))
        raise typer.Exit(1)

    _display_audit_results(report)

    if output_format == "markdown":
        rendered = format_accessibility_report(report)
    else:
        rendered = EXPORTERS[output_format](report)

    if output is None:
        console.print()
        console.print(rendered, markup=False, highlight=False)
        return

    output.write_text(rendered, encoding="utf-8")
    console.print(f"[green]Report saved to: {output}[/green]")


async def _check_health() -> None:
    """Check health of the scanning backend."""
    settings = get_settings()
    adapter = PlaywrightAdapter(settings)

    available, reason = adapter.availability()
    if not available:
        console.print(f"❌ Configuration: [red]{reason}[/red]")
        raise typer.Exit(1)
    console.print("✅ Configuration: [green]OK[/green]")

    target = "Browserless" if adapter.uses_remote_browser else "Local browser"
    if await adapter.health_check():
        console.print(f"✅ {target}: [green]OK[/green]")
    else:
        console.print(f"❌ {target}: [red]FAILED[/red]")
        raise typer.Exit(1)


def _display_audit_results(report: AccessibilityReport) -> None:
    """Display audit results in a nice format."""
    style = _STATUS_STYLE[report.overall_status]
    summary = report.summary

    console.print()
    console.print(f"[bold {style}]Overall Status: {report.overall_status}[/bold {style}]")
    console.print()

    table = Table(title="Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("URLs Scanned", f"{report.successful_scans} of {len(report.urls)}")
    table.add_row("Unique Issues", str(len(report.issues)))
    table.add_row("Total Violations", str(summary.total_violations))
    table.add_row("Critical", str(summary.critical))
    table.add_row("Serious", str(summary.serious))
    table.add_row("Moderate", str(summary.moderate))
    table.add_row("Minor", str(summary.minor))
    table.add_row("Duration", f"{report.duration / 1000:.1f}s")

    console.print(table)

    if report.issues:
        issues_table = Table(title="Issues")
        issues_table.add_column("Rule", style="cyan")
        issues_table.add_column("Impact", style="red")
        issues_table.add_column("Instances", style="magenta")
        issues_table.add_column("Description", style="white")

        for issue in report.issues:
            color = _IMPACT_STYLE.get(issue.impact, 'white')
            issues_table.add_row(
                issue.rule_id,
                f"[{color}]{issue.impact}[/{color}]",
                str(issue.instance_count),
                issue.description,
            )

        console.print(issues_table)

    for url in report.failed_scans:
        console.print(f"❌ Could not scan: {url}")

    console.print()
    console.print(f"[bold]Recommendation:[/bold] {generate_recommendation(report)}")


if __name__ == "__main__":
    app()
