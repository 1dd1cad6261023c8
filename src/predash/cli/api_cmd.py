"""API server command."""

import typer

from predash.api.main import run_api

app = typer.Typer(help="Start JSON API server for the web dashboard")


@app.callback(invoke_without_command=True)
def api(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Bind host (default: [api] host)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (default: [api] port)"),
) -> None:
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    run_api(settings, host=host or settings.api_host, port=port or settings.api_port)
