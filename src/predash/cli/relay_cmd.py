"""Relay server command."""

import typer

from predash.api.relay import run_relay

app = typer.Typer(help="Start the dev CORS relay in front of the provider APIs")


@app.callback(invoke_without_command=True)
def relay(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Bind host (default: [relay] host)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (default: [relay] port)"),
) -> None:
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    run_relay(settings, host=host or settings.relay_host, port=port or settings.relay_port)
