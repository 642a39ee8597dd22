"""
Command Line Interface for zui.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel

from ..config import get_settings
from ..core.object_owners import find_object_owners, render_object_records
from ..core.registry import PackageRegistry
from ..data.models.packages import PublishOutcome
from ..errors import ToolchainError, ZuiError
from ..integrations.sui_cli import SuiCli
from ..integrations.sui_graphql import SuiGraphQLClient
from ..log import configure_logging, resolve_level
from ..publish import CreatedObjectsStore, PackagePublisher, get_submitter


app = typer.Typer(help="zui: Sui command line tools", no_args_is_help=True)

# Global output flags, set by the callback
state = {"json": False, "quiet": False, "verbose": False}


def _console() -> Console:
    # stdout is reserved for the JSON document in --json mode
    return Console(stderr=state["json"], quiet=state["quiet"])


def _fail(error: ZuiError) -> None:
    """Report a fatal error on stderr and exit non-zero."""
    err_console = Console(stderr=True)
    if state["json"]:
        err_console.print_json(json.dumps(error.to_dict(), default=str))
    else:
        err_console.print(f"❌ {error.message}", style="red", markup=False)
        if isinstance(error, ToolchainError) and error.stderr:
            err_console.print(error.stderr, markup=False)
    raise typer.Exit(code=1)


@app.callback()
def main_callback(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
):
    """zui: Sui command line tools."""
    state.update(json=json_output, quiet=quiet, verbose=verbose)
    settings = get_settings()
    configure_logging(
        resolve_level(settings.log_level, verbose=verbose, quiet=quiet),
        settings.log_format,
    )


@app.command("find-object-owners")
def find_object_owners_command(
    object_type: str = typer.Option(
        ..., "--type", "-t",
        help='The object type to search for. E.g. "0x123::module::Struct".',
    ),
    rpc: Optional[str] = typer.Option(
        None, "--rpc", "-r",
        help="The GraphQL endpoint to use (default: ZUI_GRAPHQL_URL or Sui mainnet)",
    ),
    limit: int = typer.Option(
        0, "--limit", "-l", min=0,
        help="Maximum number of objects to fetch. Use 0 for no limit.",
    ),
):
    """Find objects of a specific type and their owners."""
    settings = get_settings()
    url = rpc or settings.graphql_url

    try:
        with SuiGraphQLClient(url, timeout=settings.graphql_timeout) as client:
            records = find_object_owners(client, object_type, limit=limit)
    except ZuiError as e:
        _fail(e)

    typer.echo(render_object_records(records))


@app.command()
def publish(
    path: Optional[Path] = typer.Option(
        None, "--path", "-p",
        help="The path to the directory containing the packages (default: current directory)",
    ),
    created_objects_dir: Optional[Path] = typer.Option(
        None, "--created-objects-dir", "-d",
        help="The directory where to save the created objects' types and IDs",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Publish all packages in a directory."""
    settings = get_settings()
    packages_root = path or Path.cwd()
    console = _console()

    registry = PackageRegistry()
    try:
        registry.load(packages_root)
    except ZuiError as e:
        _fail(e)

    cli = SuiCli(settings.sui_binary)

    def confirm() -> bool:
        if yes:
            return True
        return typer.confirm(
            "Are you sure you want to continue?", default=False, err=state["json"]
        )

    publisher = PackagePublisher(
        registry,
        cli,
        submitter=lambda: get_submitter(settings.submitter, cli, settings),
        confirm=confirm,
        console=console,
        store=CreatedObjectsStore(created_objects_dir) if created_objects_dir else None,
    )

    try:
        report = publisher.publish_all()
    except ZuiError as e:
        _fail(e)

    if state["json"]:
        typer.echo(json.dumps(report.to_dict()))

    if report.outcome == PublishOutcome.EMPTY:
        _fail(ZuiError(f"No packages found under {packages_root}", code="NO_PACKAGES"))
    if report.outcome == PublishOutcome.FAILED:
        raise typer.Exit(code=1)


@app.command()
def version():
    """Show version information."""
    from .. import __version__
    rprint(Panel.fit(f"zui v{__version__}", style="bold green"))


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
