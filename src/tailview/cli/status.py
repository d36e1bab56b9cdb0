import asyncio
import json

import click

from tailview.status.models import StatusView
from tailview.status.poller import StatusPoller
from tailview.status.render import (
    DESCRIPTION,
    NO_INTERFACE_MESSAGE,
    NO_PEERS_MESSAGE,
    PEER_COLUMNS,
    interface_rows,
    peer_rows,
)


def _make_view():
    from tailview.config.settings import config
    from tailview.status.view import TailscaleStatusView
    return TailscaleStatusView.from_config(config)


def _load() -> StatusView:
    return asyncio.run(_make_view().load())


def _table(rows, header=None) -> str:
    all_rows = ([header] if header else []) + rows
    widths = [max(len(str(row[i])) for row in all_rows) for i in range(len(all_rows[0]))]
    lines = ["  ".join(str(cell).ljust(width) for cell, width in zip(row, widths)).rstrip() for row in all_rows]
    if header:
        lines.insert(1, "  ".join("-" * width for width in widths))
    return "\n".join(lines)


def format_text(view: StatusView) -> str:
    """Plain-text rendering used by `status watch`."""
    parts = []
    if view.interface_info is None:
        parts.append(NO_INTERFACE_MESSAGE)
    else:
        parts.append(_table(interface_rows(view.interface_info)))

    parts.append("")
    if view.peer_status.error:
        parts.append(view.peer_status.error)
    elif not view.peer_status.peers:
        parts.append(NO_PEERS_MESSAGE)
    else:
        parts.append(_table(peer_rows(view.peer_status), header=PEER_COLUMNS))
    return "\n".join(parts)


async def watch(view, interval: int, count: int = 0):
    """Refresh `view` every `interval` seconds and print it as text."""
    poller = StatusPoller(view, interval=interval)
    iteration = 0
    while True:
        current = await poller.refresh()
        click.clear()
        click.echo(DESCRIPTION)
        click.echo(format_text(current))
        iteration += 1
        if count and iteration >= count:
            return
        await asyncio.sleep(interval)


@click.group()
@click.pass_context
def status(ctx):
    """Show Tailscale interface and peer status."""
    pass

@status.command(name='show')
def show_status():
    """Show interface and peer status as JSON."""
    view = _load()
    click.echo(json.dumps(view.model_dump(), indent=4))

@status.command(name='interface')
def show_interface():
    """Show interface statistics as JSON."""
    view = _load()
    if view.interface_info is None:
        click.echo(NO_INTERFACE_MESSAGE)
        return
    click.echo(json.dumps(view.interface_info.model_dump(), indent=4))

@status.command(name='peers')
def show_peers():
    """Show peer status as JSON."""
    view = _load()
    if view.peer_status.error:
        raise click.ClickException(view.peer_status.error)
    click.echo(json.dumps([peer.model_dump() for peer in view.peer_status.peers], indent=4))

@status.command(name='watch')
@click.option('--interval', default=None, type=int, help='Seconds between refreshes.')
@click.option('--count', default=0, type=int, help='Stop after this many refreshes (0 runs forever).')
def watch_status(interval, count):
    """Refresh the status table periodically."""
    from tailview.config.settings import config
    asyncio.run(watch(_make_view(), interval or config.poll_interval, count))
