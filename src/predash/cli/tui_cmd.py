"""TUI dashboard command."""

import typer

from predash.tui.app import run_tui

app = typer.Typer(help="Launch TUI dashboard")


@app.callback(invoke_without_command=True)
def tui(
    ctx: typer.Context,
    mock: bool = typer.Option(False, "--mock", help="Serve static mock listings, no network"),
) -> None:
    """Launch the Textual TUI dashboard (both providers, filter/sort, edge highlight)."""
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    run_tui(settings.with_mock() if mock else settings)
