"""
swatch command line.

Commands:
- tokens list: resolved tokens as a table or JSON
- tokens stats: counts per family
- tokens validate: reference health report for the token sets
- export: write platform files and stats.json
- serve: run the token HTTP routes with uvicorn

Project settings come from swatch.toml (see ``swatch.core.manifest``);
``--tokens`` and ``--url`` override the manifest's source.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .core.errors import DocumentError, ExportError, ManifestError
from .core.ir import ColorMode, ResolvedToken, SemanticType
from .core.loader import load_documents
from .core.manifest import SwatchManifest, load_manifest
from .core.queries import filter_tokens, search_tokens, summarize, token_stats
from .core.validation import validate_documents
from .exporters import STATS_FILE, export_platforms

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="swatch - resolve design token sets and export them for iOS, Android and the web",
    no_args_is_help=True,
)
tokens_app = typer.Typer(help="Inspect resolved tokens", no_args_is_help=True)
app.add_typer(tokens_app, name="tokens")

PROJECT_OPTION = typer.Option(
    Path("."), "--project", "-p", help="Project directory (default: current directory)"
)
TOKENS_OPTION = typer.Option(
    None, "--tokens", help="Token set directory (overrides [source] in swatch.toml)"
)
URL_OPTION = typer.Option(None, "--url", help="Base URL serving the token sets")


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"swatch {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Debug logging"),
) -> None:
    """swatch CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


# =============================================================================
# Helpers
# =============================================================================


def _load_project(project: Path, tokens_dir: Path | None, url: str | None) -> SwatchManifest:
    """Manifest for ``project`` with command line source overrides applied."""
    try:
        manifest = load_manifest(project.resolve())
    except ManifestError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    if url:
        manifest.source = replace(manifest.source, kind="http", base_url=url)
    elif tokens_dir is not None:
        root = str(tokens_dir.resolve())
        manifest.source = replace(manifest.source, kind="filesystem", root=root)
    return manifest


def _resolve_tokens(manifest: SwatchManifest) -> list[ResolvedToken]:
    try:
        store = manifest.create_store()
    except ManifestError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    tokens = asyncio.run(store.load())
    if store.used_defaults:
        err_console.print("[yellow]Token sets unavailable; showing built-in sample tokens[/yellow]")
    return tokens


def _print_json(data: object) -> None:
    typer.echo(json.dumps(data, indent=2))


# =============================================================================
# tokens
# =============================================================================


@tokens_app.command(name="list")
def tokens_list(
    type: SemanticType | None = typer.Option(None, "--type", "-t", help="Semantic type"),
    mode: ColorMode | None = typer.Option(None, "--mode", "-m", help="Color mode"),
    search: str | None = typer.Option(None, "--search", "-s", help="Name/value/description"),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON summary list"),
    project: Path = PROJECT_OPTION,
    tokens_dir: Path | None = TOKENS_OPTION,
    url: str | None = URL_OPTION,
) -> None:
    """
    List resolved tokens.

    Examples:
        swatch tokens list
        swatch tokens list --type color --mode Dark
        swatch tokens list --search primary --json
    """
    manifest = _load_project(project, tokens_dir, url)
    tokens = filter_tokens(_resolve_tokens(manifest), type=type, mode=mode)
    if search:
        tokens = search_tokens(tokens, search)

    if as_json:
        _print_json(summarize(tokens))
        return

    table = Table(title=f"{len(tokens)} tokens")
    table.add_column("Name", style="cyan")
    table.add_column("Value")
    table.add_column("Type", style="magenta")
    table.add_column("Mode")
    table.add_column("Category", style="bright_black")
    for token in tokens:
        table.add_row(
            token.name,
            token.value,
            token.type.value,
            token.mode.value if token.mode else "",
            token.category,
        )
    console.print(table)


@tokens_app.command(name="stats")
def tokens_stats(
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
    project: Path = PROJECT_OPTION,
    tokens_dir: Path | None = TOKENS_OPTION,
    url: str | None = URL_OPTION,
) -> None:
    """Token counts per family and per color mode."""
    manifest = _load_project(project, tokens_dir, url)
    stats = token_stats(_resolve_tokens(manifest))

    if as_json:
        _print_json(stats)
        return

    table = Table(title="Token statistics", show_header=False)
    table.add_column("Family", style="cyan")
    table.add_column("Count", justify="right")
    for key in ("total", "colors", "typography", "spacing", "borderRadius"):
        table.add_row(key, str(stats[key]))
    for mode, count in stats["modes"].items():
        table.add_row(f"colors ({mode})", str(count))
    console.print(table)


@tokens_app.command(name="validate")
def tokens_validate(
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    project: Path = PROJECT_OPTION,
    tokens_dir: Path | None = TOKENS_OPTION,
    url: str | None = URL_OPTION,
) -> None:
    """
    Check that every reference in the token sets resolves.

    Exits with code 1 when a required token set is missing or a reference
    is broken or circular.
    """
    manifest = _load_project(project, tokens_dir, url)
    try:
        loaded = asyncio.run(load_documents(manifest.create_source(), manifest.documents))
    except (DocumentError, ManifestError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    report = validate_documents(loaded, manifest.resolution)
    if as_json:
        _print_json(report.to_dict())
    else:
        console.print(
            f"{report.total_tokens} tokens "
            f"({report.core_tokens} core, {report.sys_tokens} sys), "
            f"{report.references} references"
        )
        for label, issues, style in (
            ("Broken", report.broken, "red"),
            ("Circular", report.circular, "red"),
            ("Fallback", report.fallbacks, "yellow"),
        ):
            if not issues:
                continue
            table = Table(title=f"{label} references ({len(issues)})", title_style=style)
            table.add_column("Document")
            table.add_column("Token", style="cyan")
            table.add_column("Reference")
            table.add_column("Detail", style="bright_black")
            for issue in issues:
                table.add_row(issue.document, issue.token, issue.reference, issue.detail)
            console.print(table)
        for path in report.skipped_documents:
            console.print(f"[bright_black]Skipped optional token set {path}[/bright_black]")
        if report.valid:
            console.print("[green]✓ All references resolve[/green]")

    if not report.valid:
        raise typer.Exit(code=1)


# =============================================================================
# export / serve
# =============================================================================


@app.command(name="export")
def export_command(
    platforms: list[str] | None = typer.Argument(
        None, help="Platforms to export (default: [export] platforms)"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory"),
    project: Path = PROJECT_OPTION,
    tokens_dir: Path | None = TOKENS_OPTION,
    url: str | None = URL_OPTION,
) -> None:
    """
    Export tokens for iOS, Android and the web.

    Examples:
        swatch export
        swatch export ios android -o build/tokens
    """
    manifest = _load_project(project, tokens_dir, url)
    tokens = _resolve_tokens(manifest)
    output_dir = output.resolve() if output else manifest.output_dir

    try:
        results = export_platforms(
            tokens,
            platforms or manifest.export.platforms,
            output_dir,
            android_package=manifest.export.android_package,
            title=manifest.export.title,
        )
    except ExportError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    for name, result in results.items():
        console.print(f"[green]✓[/green] {name}: {len(result.files_created)} files")
        for path in result.files_created:
            console.print(f"  {path.relative_to(output_dir)}", style="bright_black")
        for warning in result.warnings:
            console.print(f"  [yellow]⚠ {escape(warning)}[/yellow]")
    console.print(f"Stats written to {output_dir / STATS_FILE}")


@app.command(name="serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Port"),
    project: Path = PROJECT_OPTION,
    tokens_dir: Path | None = TOKENS_OPTION,
    url: str | None = URL_OPTION,
) -> None:
    """Serve the token API (/api/health, /api/tokens/*, /api/export/*)."""
    import uvicorn

    from .api import create_app

    manifest = _load_project(project, tokens_dir, url)
    try:
        store = manifest.create_store()
    except ManifestError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    api = create_app(
        store,
        android_package=manifest.export.android_package,
        title=manifest.export.title,
    )
    console.print(f"Serving tokens on http://{host}:{port}/api")
    uvicorn.run(api, host=host, port=port)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
