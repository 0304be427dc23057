"""Typer CLI entry point for scopegen.

Regenerates the cscope list file for the current tree and rebuilds the
cross-reference database, or with --skip rebuilds from the existing list.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from scopegen import __version__
from scopegen.config import OVERRIDE_ENV_VAR, load_config
from scopegen.exceptions import ScopegenError, ToolNotFoundError
from scopegen.indexer import FileCollector, IndexerInvoker, read_file_list

app = typer.Typer(
    name="scopegen",
    help="Collect C/C++ sources and rebuild the cscope database.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _usage_exit(ctx: typer.Context, message: str) -> None:
    """Print the error, the full help text, and exit 1."""
    console.print(f"[bold red]Error:[/bold red] {message}")
    typer.echo(ctx.get_help())
    raise typer.Exit(code=1)


def _error_exit(message: str, hint: str | None = None) -> None:
    """Print a styled error and exit."""
    console.print(f"[bold red]Error:[/bold red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
    raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"scopegen {__version__}")
        raise typer.Exit(code=0)


# Unknown options and stray arguments land in ctx.args and are reported by main
_CONTEXT: dict[str, Any] = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}


@app.command(context_settings=_CONTEXT)
def main(
    ctx: typer.Context,
    skip: Annotated[
        bool, typer.Option("--skip", "-s", help="Reuse the existing list file")
    ] = False,
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Directory to scan (default: current directory)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """Write cscope.files and build the cscope database."""
    if ctx.args:
        _usage_exit(ctx, f"No such option or argument: {' '.join(ctx.args)}")

    try:
        config = load_config(Path.cwd())
        if root is not None:
            config.root = root
        if verbose:
            config.verbose = True

        if skip:
            paths = read_file_list(config.list_file)
            console.print(
                f"[cyan]Reusing[/cyan] {config.list_file} ([bold]{len(paths)}[/bold] paths)"
            )
        else:
            FileCollector(config.root, config.suffixes).write(config.list_file)

        result = IndexerInvoker(config).run()
        if not result.success:
            console.print(
                f"[yellow]Warning:[/yellow] {config.tool_name} exited with status {result.returncode}"
            )

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(code=130)
    except ToolNotFoundError as exc:
        _error_exit(
            str(exc),
            hint=f"Install {exc.tool_name} or set {OVERRIDE_ENV_VAR} to its path.",
        )
    except ScopegenError as exc:
        _error_exit(str(exc))
    except Exception as exc:  # noqa: BLE001
        console.print_exception(show_locals=False)
        _error_exit(f"Unexpected error: {exc}")
