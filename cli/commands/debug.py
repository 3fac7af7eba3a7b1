"""Debug commands for tuning the content-selector cascade."""

import typer

from quizsource.scraper import DEFAULT_RULES, ExtractionError, diagnose_url

debug_app = typer.Typer(help="Inspect how the selector cascade sees a page.", no_args_is_help=True)


@debug_app.command("selectors")
def debug_selectors(
    url: str = typer.Argument(..., help="URL to inspect."),
    probe: list[str] = typer.Option([], "--probe", help="Extra selector to measure (repeatable)."),
) -> None:
    """Show what every selector rule would extract, and which one wins."""
    typer.echo(f"🔍 Debugging selectors for {url}\n")
    try:
        report = diagnose_url(url, probes=probe)
    except ExtractionError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    for item in report.reports:
        rule = item.rule
        if not item.matched:
            typer.echo(f"❌ {rule.rank}. {rule.selector!r} - No element found")
            continue
        typer.echo(
            f"✅ {rule.rank}. {rule.selector!r} - Found {item.char_length} chars, {item.word_count} words"
        )
        typer.echo(f"   Preview: {item.preview!r}")
        if item.strong:
            typer.echo("   ⭐ This selector has substantial content!")
        if item.winner:
            typer.echo("   🎯 WINNER: this selector would be chosen")
        typer.echo("")

    if report.winner is None:
        typer.echo("⚠️ No selector qualifies; extraction would fail.")
        if report.likely_spa:
            typer.echo("⚠️ The page looks client-rendered (JavaScript app shell).")

    if report.probes:
        typer.echo("\n🔍 Probe selectors:\n")
        for p in report.probes:
            if p.matched:
                typer.echo(f"✅ {p.selector!r} - Found {p.char_length} chars, {p.word_count} words")
                typer.echo(f"   Preview: {p.preview!r}\n")
            else:
                typer.echo(f"❌ {p.selector!r} - No element found")


@debug_app.command("rules")
def debug_rules() -> None:
    """List the default selector cascade in priority order."""
    for rule in DEFAULT_RULES:
        typer.echo(f"{rule.rank:>3}. {rule.selector}")
