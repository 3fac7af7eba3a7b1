"""quizsource CLI: developer entry-point for the extraction pipeline.

Usage:
    python cli/main.py --help

Commands:
    scrape    → extract one URL and print the result
    batch     → extract several URLs concurrently
    debug     → inspect the selector cascade for a URL
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from quizsource.xxx import
# ...` works when the CLI is invoked as `python cli/main.py` from any
# working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import List, Optional

import typer

from cli.commands.debug import debug_app
from quizsource.config import settings
from quizsource.log import configure_logging

app = typer.Typer(
    name="quizsource",
    help="Article extraction for quiz generation.",
    no_args_is_help=True,
)
app.add_typer(debug_app, name="debug")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(level=log_level)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="URL to scrape."),
    markdown: bool = typer.Option(False, "--markdown", help="Print the result as markdown."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    fallbacks: bool = typer.Option(
        settings.enable_fallbacks, "--fallbacks/--no-fallbacks", help="Try fallback strategies."
    ),
) -> None:
    """Scrape a URL and print the extracted article to stdout."""
    from quizsource.scraper import ExtractionError, extract_url, render_markdown

    typer.echo(f"[scrape] Fetching {url!r} …", err=True)
    try:
        result = extract_url(url, fallbacks=fallbacks)
    except ExtractionError as e:
        typer.echo(f"[scrape] ❌ {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return
    if markdown:
        typer.echo(render_markdown(result))
        return

    typer.echo(f"[scrape] Title    : {result.title}")
    typer.echo(f"[scrape] Author   : {result.author or 'Not found'}")
    typer.echo(f"[scrape] Published: {result.publish_date or 'Not found'}")
    typer.echo(f"[scrape] Selector : {result.selector}")
    typer.echo(f"[scrape] Words    : {result.word_count}")
    if result.low_confidence:
        typer.echo("[scrape] ⚠️  Content is short. This might not generate a good quiz.")
    typer.echo("")
    typer.echo(result.content)


@app.command("batch")
def batch(
    urls: List[str] = typer.Argument(..., help="URLs to extract."),
    workers: Optional[int] = typer.Option(None, "--workers", help="Concurrent extractions."),
) -> None:
    """Extract several URLs concurrently and print a one-line summary each."""
    from quizsource.scraper import extract_many

    items = extract_many(urls, max_workers=workers)
    failures = 0
    for item in items:
        if item.result is not None:
            flag = " (low confidence)" if item.result.low_confidence else ""
            typer.echo(f"✅ {item.url}  {item.result.title!r}  {item.result.word_count} words{flag}")
        else:
            failures += 1
            typer.echo(f"❌ {item.url}  {item.error}")
    if failures:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
