"""gitoscope CLI: Typer application over the async facade."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Optional, TypeVar

import typer
from rich.console import Console

from gitoscope import __version__

app = typer.Typer(
    name="gitoscope",
    help="Inspect HEAD, index, and working-copy views of a git repository.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
out = Console()

T = TypeVar("T")

_VIEWS = ("tree", "staged", "working")


@dataclass
class _Options:
    repo: Optional[str] = None
    config: Optional[str] = None
    verbose: bool = False


def _load(ctx: typer.Context, format: Optional[str] = None):
    """Load config, apply global options, set up logging. Exit 2 on failure."""
    from gitoscope.config.loader import ConfigError, load_config
    from gitoscope.config.schema import OUTPUT_FORMATS
    from gitoscope.log import configure_logging

    opts: _Options = ctx.obj or _Options()
    try:
        cfg = load_config(Path.cwd(), opts.config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if opts.repo:
        cfg.repository.path = opts.repo
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    configure_logging(cfg.logging, verbose=opts.verbose)
    return cfg


def _run(awaitable: Awaitable[T]) -> T:
    """Drive a facade coroutine; map git failures to exit codes."""
    from gitoscope.git.adapter import GitError, GitObjectNotFound

    try:
        return asyncio.run(awaitable)
    except GitObjectNotFound as exc:
        console.print(f"[bold red]Not found:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _emit(data: Any, fmt: str) -> None:
    from gitoscope.output import json_report

    if fmt == "yaml":
        typer.echo(json_report.render_yaml(data), nl=False)
    else:
        typer.echo(json_report.render(data))


# ── status ────────────────────────────────────────────────────────────────────


@app.command()
def status(
    ctx: typer.Context,
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    all_paths: bool = typer.Option(False, "--all", "-a", help="Include unchanged tracked paths in the table"),
) -> None:
    """Show per-path presence in HEAD, index, and working copy."""
    from gitoscope.output import json_report, terminal
    from gitoscope.service import Gitoscope

    cfg = _load(ctx, format)
    result = _run(Gitoscope(cfg).get_status())

    if cfg.output.format == "terminal":
        terminal.render_status(result, console=out, show_clean=all_paths)
    else:
        _emit(json_report.status_to_dict(result), cfg.output.format)


# ── show ──────────────────────────────────────────────────────────────────────


@app.command()
def show(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Repository-relative file path"),
    view: str = typer.Option("working", "--view", help="tree | staged | working"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
) -> None:
    """Print the tree, staged, or working-copy content of PATH."""
    from gitoscope.output import json_report
    from gitoscope.service import Gitoscope

    if view not in _VIEWS:
        console.print(f"[bold red]Invalid view:[/bold red] {view}")
        raise typer.Exit(code=2)

    cfg = _load(ctx, format)
    service = Gitoscope(cfg)
    if view == "tree":
        result = _run(service.resolve_tree_content(path))
    elif view == "staged":
        result = _run(service.resolve_cache_content(path))
    else:
        result = _run(service.resolve_working_copy_content(path))

    if cfg.output.format == "terminal":
        if not result.found:
            console.print(f"[dim]{path}: not in HEAD ({result.head_lookup.value})[/dim]")
        typer.echo(result.text, nl=False)
    else:
        _emit(json_report.content_to_dict(path, view, result), cfg.output.format)


# ── raw objects ───────────────────────────────────────────────────────────────


@app.command()
def commit(
    ctx: typer.Context,
    commit_id: str = typer.Argument("HEAD", help="Commit id or revision"),
    format: Optional[str] = typer.Option(None, "--format", "-f"),
) -> None:
    """Describe a commit."""
    from gitoscope.output import terminal
    from gitoscope.service import Gitoscope

    cfg = _load(ctx, format)
    info = _run(Gitoscope(cfg).get_commit(commit_id))
    if cfg.output.format == "terminal":
        terminal.render_commit(info, console=out)
    else:
        _emit(info.to_dict(), cfg.output.format)


@app.command()
def tree(
    ctx: typer.Context,
    tree_id: str = typer.Argument("HEAD^{tree}", help="Tree id or revision"),
    format: Optional[str] = typer.Option(None, "--format", "-f"),
) -> None:
    """List the entries of a tree."""
    from gitoscope.output import terminal
    from gitoscope.service import Gitoscope

    cfg = _load(ctx, format)
    info = _run(Gitoscope(cfg).get_tree(tree_id))
    if cfg.output.format == "terminal":
        terminal.render_tree(info, console=out)
    else:
        _emit(info.to_dict(), cfg.output.format)


@app.command()
def blob(
    ctx: typer.Context,
    blob_id: str = typer.Argument(..., help="Blob id or rev:path"),
    format: Optional[str] = typer.Option(None, "--format", "-f"),
) -> None:
    """Print a blob."""
    from gitoscope.output import terminal
    from gitoscope.service import Gitoscope

    cfg = _load(ctx, format)
    info = _run(Gitoscope(cfg).get_blob(blob_id))
    if cfg.output.format == "terminal":
        terminal.render_blob(info, console=out)
    else:
        _emit(info.to_dict(), cfg.output.format)


@app.command()
def refs(
    ctx: typer.Context,
    format: Optional[str] = typer.Option(None, "--format", "-f"),
) -> None:
    """List references, followed by HEAD."""
    from gitoscope.output import json_report, terminal
    from gitoscope.service import Gitoscope

    cfg = _load(ctx, format)
    result = _run(Gitoscope(cfg).get_references())
    if cfg.output.format == "terminal":
        terminal.render_references(result, console=out)
    else:
        _emit(json_report.objects_to_list(result), cfg.output.format)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .gitoscope.toml in the current directory."""
    from gitoscope.config.defaults import DEFAULT_TOML
    from gitoscope.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version & global options ──────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"gitoscope {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Repository path (overrides config)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gitoscope.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """HEAD, index, and working-copy views of a repository."""
    ctx.obj = _Options(repo=repo, config=config, verbose=verbose)
