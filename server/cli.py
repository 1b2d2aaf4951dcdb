#!/usr/bin/env python3
"""docsite command line: serve, render and check the documentation page."""

from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel

from config import load_settings
from observability import setup_logging
from .composer import PageComposer

console = Console(stderr=True)
app = typer.Typer(help="docsite - single page documentation site")


def _composer(config: Optional[str]) -> PageComposer:
    settings = load_settings(config)
    setup_logging(level=settings.log_level, use_json=settings.log_json, log_file=settings.log_file)
    return PageComposer(settings)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes")
):
    """Serve the documentation page"""
    console.print(f"Serving documentation on http://{host}:{port}/", style="bold blue")
    uvicorn.run("server.app:app", host=host, port=port, reload=reload)


@app.command()
def render(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the page to this file"),
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Directory holding docs/main.md"),
    config: Optional[str] = typer.Option(None, "--config", help="Site YAML config")
):
    """Render the page once to stdout or a file"""
    outcome = _composer(config).render(str(cwd) if cwd else None)

    if output:
        output.write_text(outcome.html, encoding="utf-8")
        console.print(f"Wrote {output}", style="green")
    else:
        typer.echo(outcome.html, nl=False)

    if not outcome.ok:
        raise typer.Exit(1)


@app.command()
def check(
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Directory holding docs/main.md"),
    config: Optional[str] = typer.Option(None, "--config", help="Site YAML config")
):
    """Check that the documentation file loads and compiles"""
    outcome = _composer(config).render(str(cwd) if cwd else None)

    if outcome.ok:
        console.print(f"✅ {outcome.path} renders cleanly", style="bold green")
        return

    diagnostic = outcome.diagnostic
    location = f"{diagnostic.path}:{diagnostic.line}" if diagnostic.line else diagnostic.path
    console.print(Panel(
        f"{diagnostic.message}\n\n{diagnostic.detail}\n\n{location}",
        title=f"❌ {diagnostic.kind} ({diagnostic.stage})",
        style="bold red"
    ))
    raise typer.Exit(1)


def main():
    app(prog_name="docsite")


if __name__ == "__main__":
    main()
