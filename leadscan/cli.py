"""Typer CLI application for LeadScan.

Provides commands to assess a site end to end, or to run the SEO,
accessibility and mobile audits on their own.
"""

import asyncio
import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from leadscan.app import LeadScanApp
from leadscan.utils.validators import validate_url

console = Console()
app = typer.Typer(
    name="leadscan",
    help="LeadScan -- website quality assessment for outreach lead ranking.",
    add_completion=False,
    no_args_is_help=True,
)

_OK = "[green]✔ yes[/green]"
_NO = "[red]✘ no[/red]"
_UNKNOWN = "[yellow]○ n/a[/yellow]"


def _setup_logging(verbose: bool = False, default_level: str = "WARNING") -> None:
    """Configure logging level and format."""
    level = logging.DEBUG if verbose else getattr(logging, default_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _run_async(coro):
    """Run an async coroutine from synchronous CLI context."""
    return asyncio.run(coro)


def _get_app(config: Optional[str], verbose: bool) -> LeadScanApp:
    lead_app = LeadScanApp(config_path=config)
    lead_app.initialize()
    _setup_logging(verbose, lead_app.log_level)
    return lead_app


def _check_url(url: str) -> str:
    candidate = url if url.startswith(("http://", "https://")) else f"https://{url}"
    ok, message = validate_url(candidate)
    if not ok:
        console.print(f"[red]Invalid URL:[/red] {message}")
        raise typer.Exit(code=2)
    return candidate


def _flag(value: Optional[bool]) -> str:
    if value is None:
        return _UNKNOWN
    return _OK if value else _NO


def _print_record(record) -> None:
    table = Table(title=f"Assessment: {record.domain}", show_header=True, header_style="bold magenta")
    table.add_column("Check", style="cyan", min_width=20)
    table.add_column("Result", min_width=10)
    table.add_column("Details", max_width=60)

    table.add_row("Score", f"[bold]{record.score}[/bold]", "higher means more to fix")
    table.add_row("Title", _flag(record.title_check), (record.title or "")[:60])
    table.add_row("Meta description", _flag(record.meta_description_check), (record.meta_description or "")[:60])
    table.add_row("Meta keywords", _flag(record.meta_keywords_check), (record.meta_keywords or "")[:60])
    table.add_row("Image alt", _flag(record.img_alt_check), record.img_alt or "no images")
    table.add_row("Footer", _flag(not record.footer_outdated if record.has_footer_check else None), record.has_footer or "")
    table.add_row("Facebook pixel", _flag(record.facebook_pixel_check), "")
    table.add_row("HTTPS", _flag(None if record.insecure_site is None else not record.insecure_site), "")
    table.add_row("Mobile friendly", _flag(record.is_mobile_friendly), "")
    table.add_row("English content", _flag(record.is_english), "")
    if record.seo:
        table.add_row("SEO score", str(record.seo.score), f"{record.seo.broken_links} broken links")
    if record.accessibility and record.accessibility.available:
        a = record.accessibility
        table.add_row("Accessibility", str(a.score), f"{a.error_count} errors, {a.warning_count} warnings")
    table.add_row("CMS / framework", "", " / ".join(x for x in (record.cms, record.framework) if x) or "unknown")
    if record.analytics_tools:
        table.add_row("Analytics", "", ", ".join(record.analytics_tools))
    contact = [c for c in (record.domain_email_address, record.phone_number, record.address) if c]
    if contact:
        table.add_row("Contact", "", "; ".join(contact))
    if record.relevant is not None:
        table.add_row(f"Relevant to {record.keyword!r}", _flag(record.relevant), "")
    console.print(table)

    if record.summary:
        console.print(Panel(record.summary.strip(), title="Summary"))


# ------------------------------------------------------------------
# assess
# ------------------------------------------------------------------
@app.command()
def assess(
    url: str = typer.Argument(..., help="Site URL or domain (e.g. example.com)."),
    keyword: Optional[str] = typer.Option(None, "--keyword", "-k", help="Check relevance to this keyword."),
    quick: bool = typer.Option(False, "--quick", "-q", help="Skip contact pages, internal links, accessibility and mobile."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible summary."),
    include_filtered: bool = typer.Option(
        False, "--include-filtered", help="Assess directory, social and blacklisted sites anyway.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to settings.yaml."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Run the full assessment pipeline on a site."""
    url = _check_url(url)
    lead_app = _get_app(config, verbose)
    assessor = lead_app.get_assessor(seed=seed)
    options = {"keyword": keyword, "quick": quick, "skip_filtered": not include_filtered}

    if as_json:
        record = _run_async(assessor.run_assessment(url, **options))
        console.print_json(json.dumps(record.to_dict(), default=str))
        return

    console.print(Panel(f"[bold cyan]LeadScan: {url}[/bold cyan]"))
    with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console) as progress:
        progress.add_task(description="Assessing site...", total=None)
        record = _run_async(assessor.run_assessment(url, **options))

    if record.error:
        console.print(f"[red]Assessment failed:[/red] {record.error}")
        raise typer.Exit(code=1)
    _print_record(record)


# ------------------------------------------------------------------
# seo
# ------------------------------------------------------------------
@app.command()
def seo(
    url: str = typer.Argument(..., help="Page URL."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to settings.yaml."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Run the page-level SEO audit."""
    url = _check_url(url)
    assessor = _get_app(config, verbose).get_assessor()

    async def _run():
        markup = await assessor.fetcher.fetch(url, timeout=assessor.settings.fetch_timeout)
        return await assessor.audit_seo(url, markup)

    result = _run_async(_run())
    if result is None:
        console.print("[red]Could not fetch or parse the page.[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"SEO: {url}", show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan", min_width=25)
    table.add_column("Value", max_width=60)
    for key, value in result.to_dict().items():
        if key in ("inter_link_href", "url"):
            continue
        table.add_row(key.replace("_", " "), str(value)[:60])
    console.print(table)


# ------------------------------------------------------------------
# accessibility
# ------------------------------------------------------------------
@app.command()
def accessibility(
    url: str = typer.Argument(..., help="Page URL."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to settings.yaml."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Run the WCAG2AA accessibility audit."""
    url = _check_url(url)
    assessor = _get_app(config, verbose).get_assessor()
    result = _run_async(assessor.audit_accessibility(url))
    if not result.available:
        console.print("[yellow]Accessibility audit unavailable for this page.[/yellow]")
        raise typer.Exit(code=1)

    console.print(Panel(
        f"Score: [bold]{result.score}[/bold]  "
        f"errors={result.error_count} warnings={result.warning_count} passes={result.pass_count}",
        title=f"Accessibility: {url}",
    ))
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Type", min_width=8)
    table.add_column("Guideline", style="cyan", min_width=20)
    table.add_column("Message", max_width=60)
    for issue in result.issue_list[:25]:
        table.add_row(issue.type, issue.guideline_name, issue.message[:60])
    console.print(table)


# ------------------------------------------------------------------
# mobile
# ------------------------------------------------------------------
@app.command()
def mobile(
    url: str = typer.Argument(..., help="Page URL."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to settings.yaml."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Check mobile friendliness at a phone viewport."""
    url = _check_url(url)
    assessor = _get_app(config, verbose).get_assessor()
    signals = _run_async(assessor.mobile_prober.evaluate_mobile_signals(url))
    if signals is None:
        console.print(f"Mobile friendly: {_NO} (page could not be evaluated)")
        raise typer.Exit(code=1)

    table = Table(title=f"Mobile: {url}", show_header=True, header_style="bold magenta")
    table.add_column("Signal", style="cyan", min_width=25)
    table.add_column("Result", min_width=10)
    for key, value in signals.to_dict().items():
        table.add_row(key.replace("_", " "), _flag(value))
    console.print(table)


# ------------------------------------------------------------------
# status
# ------------------------------------------------------------------
@app.command()
def status(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to settings.yaml."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show configuration and dependency status."""
    lead_app = _get_app(config, verbose)
    console.print(Panel("[bold cyan]System Status[/bold cyan]"))

    table = Table(title="Component Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", min_width=25)
    table.add_column("Status", min_width=10)
    table.add_column("Details", max_width=50)

    labels = {"ok": "[green]✔ OK[/green]", "warning": "[yellow]⚠ Warning[/yellow]", "error": "[red]✘ Error[/red]"}
    for component, info in lead_app.get_status().items():
        table.add_row(component.title(), labels.get(info["status"], info["status"]), info["details"])
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
