"""CLI commands for deckbridge.

``monitor`` is meant to be launched by the host in place of a plugin binary:
it registers with the startup arguments it is given and prints every event.
"""

import asyncio
import json

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from deckbridge import __version__
from deckbridge.config.loader import load_config
from deckbridge.config.schema import DeckBridgeConfig
from deckbridge.errors import ConnectError, DeckBridgeError, RegistrationParamsError, SocketError, TransportError
from deckbridge.log_forwarding import HostLogSink, forward_logs, install_host_log_sink
from deckbridge.logging_utils import configure_logging
from deckbridge.protocol.events import InboundEvent, UnknownEvent
from deckbridge.registration import RegistrationParams
from deckbridge.transport.connect import connect

app = typer.Typer(
    name="deckbridge",
    help="deckbridge - typed WebSocket link to the Stream Deck host",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"deckbridge v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", callback=version_callback, is_eager=True
    ),
):
    """deckbridge - typed WebSocket link to the Stream Deck host."""
    pass


@app.command()
def version():
    """Show the installed version."""
    console.print(f"deckbridge v{__version__}")


def _describe(event: InboundEvent) -> str:
    if isinstance(event, UnknownEvent):
        data = event.data
    else:
        data = event.model_dump(mode="json", by_alias=True, exclude={"event"})
    return json.dumps(data, ensure_ascii=False) if data else ""


async def _monitor(params: RegistrationParams, config: DeckBridgeConfig, url: str | None) -> bool:
    """Print inbound events until the host closes the socket. Returns False after a transport failure."""
    socket = await connect(url or params.port, params.event, params.uuid, config=config.transport)
    console.print(f"[green]✓[/green] Registered as [cyan]{escape(params.uuid)}[/cyan] at {socket.endpoint}")

    forwarder = None
    handler_id = None
    if config.logging.forward_to_host:
        sink = HostLogSink()
        handler_id = install_host_log_sink(sink, level=config.logging.forward_level)
        forwarder = asyncio.create_task(forward_logs(socket, sink))

    ok = True
    try:
        async with socket:
            async for item in socket.results():
                if isinstance(item, TransportError):
                    console.print(f"[red]{escape(item.message)}[/red]")
                    ok = False
                elif isinstance(item, SocketError):
                    console.print(f"[yellow]Bad message:[/yellow] {escape(item.message)}")
                else:
                    console.print(f"[cyan]{escape(item.event)}[/cyan] {escape(_describe(item))}")
    finally:
        if handler_id is not None:
            logger.remove(handler_id)
        if forwarder is not None:
            forwarder.cancel()
    console.print("[dim]Host closed the connection[/dim]" if ok else "[dim]Connection lost[/dim]")
    return ok


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def monitor(
    ctx: typer.Context,
    url: str = typer.Option(None, "--url", help="Connect to this ws:// URL instead of the given -port"),
    forward: bool = typer.Option(False, "--forward-logs", help="Also ship log records to the host log"),
):
    """Register with the host using its startup arguments and print every event."""
    config = load_config()
    if forward:
        config.logging.forward_to_host = True
    configure_logging(config.logging, name="monitor")

    try:
        params = RegistrationParams.from_args(ctx.args)
    except RegistrationParamsError as e:
        console.print(f"[red]Invalid startup arguments ({e.code}): {escape(e.message)}[/red]")
        raise typer.Exit(2)

    try:
        ok = asyncio.run(_monitor(params, config, url))
    except ConnectError as e:
        console.print(f"[red]Could not register with the host: {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except DeckBridgeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\nGoodbye!")
        return
    if not ok:
        raise typer.Exit(1)
