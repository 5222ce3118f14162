#!/usr/bin/env python3

from __future__ import annotations
import asyncio
import json
from contextlib import aclosing
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from client.environment import Environment, load_environment_overrides, resolve_url
from client.ws_client import WebSocketClient
from models.display import status_markup
from models.events import EventDTO
from models.orders import OrderDTO
from shared.envelope import Envelope, create_envelope
from shared.errors import WebSocketError
from shared.log import configure_root_logging, get_logger

app = typer.Typer(help="wirestream realtime client CLI")
console = Console()
logger = get_logger(__name__)

ENVELOPE_TYPES: Dict[str, Any] = {
    "event": Envelope[EventDTO],
    "order": Envelope[OrderDTO],
    "raw": Envelope[Any],
}


def _build_client(env: Optional[str], url: Optional[str]) -> WebSocketClient:
    try:
        environment = Environment.from_string(env) if env else Environment.default()
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--env")
    if url is None:
        url = resolve_url(environment, load_environment_overrides())
    return WebSocketClient(environment, url=url)


def _render(envelope: Envelope) -> str:
    payload = envelope.payload
    stamp = envelope.timestamp.isoformat() if envelope.timestamp else "-"
    if isinstance(payload, EventDTO):
        body = f"{payload.title} @ {payload.location} {status_markup(payload.event_status)}"
    elif isinstance(payload, OrderDTO):
        body = f"{payload.title} @ {payload.location} {status_markup(payload.order_status)}"
    else:
        body = escape(json.dumps(payload, default=str))
    return f"[dim]{stamp}[/] [bold]{escape(envelope.type)}[/] {body}"


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except WebSocketError as e:
        console.print(f"[red]{e.kind}[/]: {e}")
        raise typer.Exit(code=1)


@app.callback()
def main_options(
    log_level: str = typer.Option("WARNING", help="Root log level (DEBUG, INFO, WARNING, ERROR)"),
):
    configure_root_logging(log_level)


@app.command()
def environments():
    """List the known environments and their WebSocket URLs."""
    overrides = load_environment_overrides()
    table = Table(title="Environments")
    table.add_column("Name")
    table.add_column("URL")
    table.add_column("Source")
    for environment in Environment:
        source = "config" if environment in overrides else "built-in"
        table.add_row(environment.value, resolve_url(environment, overrides), source)
    console.print(table)


@app.command()
def listen(
    token: str = typer.Option(..., envvar="WIRESTREAM_TOKEN", help="Authentication token"),
    env: Optional[str] = typer.Option(None, help="Environment: dev, qa or prod"),
    url: Optional[str] = typer.Option(None, help="WebSocket URL; overrides --env"),
    kind: str = typer.Option("raw", help="Payload schema: event, order or raw"),
    limit: int = typer.Option(0, help="Stop after this many messages (0 = until closed)"),
):
    """Authenticate and print incoming envelopes."""
    envelope_type = ENVELOPE_TYPES.get(kind)
    if envelope_type is None:
        raise typer.BadParameter(f"must be one of {', '.join(ENVELOPE_TYPES)}", param_hint="--kind")
    client = _build_client(env, url)
    console.print(f"[bold green]Listening[/] on {client.url} ({kind})")

    async def main_loop() -> None:
        async with client:
            await client.authenticate(token)
            count = 0
            async with aclosing(client.receive(envelope_type)) as stream:
                async for envelope in stream:
                    console.print(_render(envelope))
                    count += 1
                    if limit and count >= limit:
                        break
            console.print(f"[dim]received {count} message(s)[/]")

    _run(main_loop())


@app.command()
def send(
    token: str = typer.Option(..., envvar="WIRESTREAM_TOKEN", help="Authentication token"),
    msg_type: str = typer.Option(..., "--type", help="Envelope type tag"),
    payload: str = typer.Option("{}", help="JSON payload"),
    env: Optional[str] = typer.Option(None, help="Environment: dev, qa or prod"),
    url: Optional[str] = typer.Option(None, help="WebSocket URL; overrides --env"),
):
    """Authenticate and send a single envelope."""
    try:
        body = json.loads(payload)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"invalid JSON: {e}", param_hint="--payload")
    client = _build_client(env, url)
    envelope = create_envelope(msg_type, body)

    async def main_loop() -> None:
        async with client:
            await client.authenticate(token)
            await client.send(envelope)
        console.print(f"[green]Sent[/] {msg_type} to {client.url}")

    _run(main_loop())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
