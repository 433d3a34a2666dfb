"""
Command-line interface for multilan-helper.

Provides commands for:
- Inspecting a catalog export and checking its health
- Searching by wording or multilan ID
- Bulk-linking free text and detecting the displayed language
- Rendering a wording with variable values
- Converting legacy .tra files to UTF-8

Usage:
    multilan info --catalog api-data.json
    multilan search "Submit" --global
    multilan link texts.txt --output matches.json
    multilan render 10001 --lang fr --var name=John
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from multilan_helper import __version__
from multilan_helper.catalog import load_catalog, read_json, read_tra_files
from multilan_helper.config import APP_NAME, DEFAULT_CATALOG, MatchConfig
from multilan_helper.diagnostics import collect_diagnostics, summarize_checks
from multilan_helper.errors import MultilanError
from multilan_helper.language import detect_language
from multilan_helper.linking import bulk_auto_link
from multilan_helper.models import (
    SUPPORTED_LANGUAGES,
    CatalogStore,
    LinkCandidate,
    SearchResult,
    parse_language,
)
from multilan_helper.search import (
    global_search_translations,
    lookup as lookup_entry,
    search_translations,
)
from multilan_helper.variables import replace_variables, unresolved_keys

app = typer.Typer(
    name="multilan",
    help="Multilan Helper: resolve on-screen text against a translation catalog",
    add_completion=False,
)
console = Console()

CATALOG_OPTION = typer.Option(
    DEFAULT_CATALOG, "--catalog", "-c",
    help="Catalog JSON export or directory of .tra files",
)


def version_callback(value: bool):
    if value:
        console.print(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable debug logging",
    ),
):
    """Multilan Helper: translation catalog tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(catalog: Path) -> CatalogStore:
    try:
        return load_catalog(catalog)
    except FileNotFoundError:
        console.print(f"[red]Error:[/] Catalog not found: {catalog}", style="bold")
        raise typer.Exit(1)
    except MultilanError as e:
        console.print(f"[red]Error:[/] {e}", style="bold")
        raise typer.Exit(1)


def _results_table(title: str, results: List[SearchResult]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Score", justify="right")
    for lang in SUPPORTED_LANGUAGES:
        table.add_column(lang.value.upper())
    for result in results:
        score = f"{result.score:.2f}" if result.score is not None else ""
        table.add_row(
            result.multilan_id,
            score,
            *(result.translations.get(lang, "") for lang in SUPPORTED_LANGUAGES),
        )
    return table


def _read_candidates(path: Path) -> List[LinkCandidate]:
    """Read link candidates from JSON (list of node objects) or plain text lines."""
    if path.suffix.lower() == ".json":
        items = read_json(path)
        return [
            LinkCandidate(
                node_id=str(item.get("nodeId", i)),
                node_name=item.get("nodeName") or "",
                text=item.get("text") or "",
                multilan_id=item.get("multilanId"),
                is_placeholder=bool(item.get("isPlaceholder", False)),
            )
            for i, item in enumerate(items)
        ]
    lines = path.read_text(encoding="utf-8").splitlines()
    return [LinkCandidate(node_id=str(i + 1), node_name=f"line {i + 1}", text=line) for i, line in enumerate(lines)]


@app.command()
def info(catalog: Path = CATALOG_OPTION):
    """Show catalog size and source."""
    store = _load(catalog)
    table = Table(title=f"Catalog: {catalog}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Source", store.source)
    table.add_row("Entries", str(len(store)))
    table.add_row("With metadata", str(len(store.metadata)))
    for lang in SUPPORTED_LANGUAGES:
        count = sum(1 for entry in store.translations.values() if lang in entry)
        table.add_row(f"Wordings ({lang.value})", str(count))
    console.print(table)


@app.command()
def search(
    query: str = typer.Argument(..., help="Text or multilan ID to search for"),
    catalog: Path = CATALOG_OPTION,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n",
        help="Maximum number of results",
    ),
    global_search: bool = typer.Option(
        False, "--global", "-g",
        help="Rank exact and partial ID matches first",
    ),
):
    """Search the catalog by wording or ID."""
    store = _load(catalog)
    config = MatchConfig()
    if global_search:
        results = global_search_translations(
            store.translations, query, limit or config.global_search_limit, store.metadata
        )
    else:
        results = search_translations(store.translations, query, limit or config.search_limit)

    if not results:
        console.print(f"[yellow]No matches for:[/] {query}")
        return
    console.print(_results_table(f"Results for {query!r} ({len(results)})", results))


@app.command()
def lookup(
    multilan_id: str = typer.Argument(..., help="Multilan ID"),
    catalog: Path = CATALOG_OPTION,
):
    """Show every language, variable and metadata field of one entry."""
    store = _load(catalog)
    result = lookup_entry(store.translations, multilan_id, store.metadata)
    if result is None:
        console.print(f"[yellow]ID not found:[/] {multilan_id}")
        raise typer.Exit(1)

    table = Table(title=f"Multilan {multilan_id}")
    table.add_column("Language", style="cyan")
    table.add_column("Wording", style="green")
    for lang in SUPPORTED_LANGUAGES:
        table.add_row(lang.value, result.translations.get(lang, "[dim]missing[/]"))
    console.print(table)

    if result.variable_occurrences:
        keys = ", ".join(v.key for v in result.variable_occurrences)
        console.print(f"[bold]Variables:[/] {keys}")
    if result.metadata is not None:
        for key, value in result.metadata.to_dict().items():
            console.print(f"[dim]{key}:[/] {value}")


@app.command()
def link(
    input_file: Path = typer.Argument(..., help="Text lines, or JSON list of {nodeId, nodeName, text, multilanId?, isPlaceholder?}"),
    catalog: Path = CATALOG_OPTION,
    output: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Write the match result as JSON",
    ),
    threshold: float = typer.Option(
        MatchConfig().fuzzy_threshold, "--threshold",
        help="Minimum score for a fuzzy suggestion",
    ),
):
    """Bulk-match free text against the catalog."""
    store = _load(catalog)
    try:
        candidates = _read_candidates(input_file)
    except (OSError, MultilanError) as e:
        console.print(f"[red]Error:[/] {e}", style="bold")
        raise typer.Exit(1)

    result = bulk_auto_link(store.translations, candidates, MatchConfig(fuzzy_threshold=threshold))

    table = Table(title=f"Found {len(result.exact_matches)} exact + {len(result.fuzzy_matches)} fuzzy matches")
    table.add_column("Text", style="cyan")
    table.add_column("Match")
    table.add_column("ID(s)", style="green")
    for match in result.exact_matches:
        table.add_row(match.text, "exact", match.multilan_id)
    for match in result.fuzzy_matches:
        ids = ", ".join(f"{s.multilan_id} ({s.score:.1f})" for s in match.suggestions)
        table.add_row(match.text, "[yellow]fuzzy[/]", ids)
    for item in result.unmatched:
        table.add_row(item.text, "[red]none[/]", "")
    console.print(table)

    if output:
        output.write_text(json.dumps(result.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
        console.print(f"\n[green]Saved to:[/] {output}")


@app.command("detect-language")
def detect_language_command(
    input_file: Path = typer.Argument(..., help="JSON list of {multilanId, text} objects"),
    catalog: Path = CATALOG_OPTION,
):
    """Detect which language linked texts are currently shown in."""
    store = _load(catalog)
    try:
        items = read_json(input_file)
    except (OSError, MultilanError) as e:
        console.print(f"[red]Error:[/] {e}", style="bold")
        raise typer.Exit(1)

    pairs = [(str(item.get("multilanId", "")), item.get("text", "")) for item in items]
    console.print(detect_language(store.translations, pairs).value)


@app.command()
def render(
    multilan_id: str = typer.Argument(..., help="Multilan ID"),
    catalog: Path = CATALOG_OPTION,
    lang: str = typer.Option(
        "en", "--lang", "-l",
        help="Language code",
    ),
    variables: List[str] = typer.Option(
        [], "--var",
        help="Variable value as key=value (repeatable; use name_2 for the second occurrence)",
    ),
):
    """Print one wording with its ###variables### filled in."""
    language = parse_language(lang)
    if language is None:
        console.print(f"[red]Error:[/] Unsupported language: {lang}", style="bold")
        raise typer.Exit(1)

    store = _load(catalog)
    entry = store.get(multilan_id)
    wording = entry.get(language) if entry else None
    if not wording:
        console.print(f"[yellow]No {language.value} wording for:[/] {multilan_id}")
        raise typer.Exit(1)

    values = dict(v.split("=", 1) for v in variables if "=" in v)
    rendered = replace_variables(wording, values)
    console.print(rendered, markup=False)

    unresolved = unresolved_keys(wording, values)
    if unresolved:
        console.print(f"[yellow]Unresolved variables:[/] {', '.join(unresolved)}")


@app.command()
def doctor(catalog: Path = CATALOG_OPTION):
    """Run catalog health checks."""
    store = _load(catalog)
    checks = collect_diagnostics(store)

    table = Table(title="Catalog diagnostics")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Detail")
    colors = {"ok": "green", "warn": "yellow", "error": "red"}
    for check in checks:
        table.add_row(check.name, f"[{colors[check.status]}]{check.status}[/]", check.detail)
    console.print(table)

    summary = summarize_checks(checks)
    console.print(f"\n[green]{summary['ok']} ok[/], [yellow]{summary['warn']} warn[/], [red]{summary['error']} error[/]")
    if summary["error"]:
        raise typer.Exit(1)


@app.command("convert-tra")
def convert_tra(
    source_dir: Path = typer.Argument(..., help="Directory with <lang>-BE.tra or <lang>.tra files"),
    output_dir: Path = typer.Argument(..., help="Where to write UTF-8 copies"),
):
    """Convert legacy .tra files (Windows-1252 or UTF-8) to UTF-8 <lang>.tra files."""
    if not source_dir.is_dir():
        console.print(f"[red]Error:[/] Not a directory: {source_dir}", style="bold")
        raise typer.Exit(1)

    output_dir.mkdir(parents=True, exist_ok=True)
    for lang, content in read_tra_files(source_dir).items():
        if not content:
            console.print(f"  [yellow]{lang}:[/] not found, skipping")
            continue
        target = output_dir / f"{lang}.tra"
        target.write_text(content, encoding="utf-8")
        console.print(f"  [green]{lang}:[/] {target}")
    console.print("[bold green]Done![/]")


if __name__ == "__main__":
    app()
