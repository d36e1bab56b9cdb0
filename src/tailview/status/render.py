"""HTML rendering of a StatusView."""

from html import escape
from typing import List, Optional

from tailview.status.models import InterfaceInfo, PeerStatus, StatusView

TITLE = "Tailscale"
DESCRIPTION = "Tailscale is a cross-platform and easy to use virtual LAN."
NO_INTERFACE_MESSAGE = "No interface online."
NO_PEERS_MESSAGE = "No peers."

PEER_COLUMNS = ["Hostname", "IP", "Online", "Connection", "Download", "Upload"]


def _row(cells: List[str], tag: str = "td") -> str:
    inner = "".join(f'<{tag} class="{tag} left">{escape(str(cell))}</{tag}>' for cell in cells)
    return f'<tr class="tr">{inner}</tr>'


def interface_rows(info: InterfaceInfo) -> List[List[str]]:
    """Label/value pairs shown for the interface; also used by the CLI."""
    return [
        ["Interface Name", info.name],
        ["IPv4 Address", info.ipv4],
        ["IPv6 Address", info.ipv6],
        ["MTU", info.mtu],
        ["Total Download", info.rx_bytes],
        ["Total Upload", info.tx_bytes],
    ]


def peer_rows(status: PeerStatus) -> List[List[str]]:
    rows = []
    for peer in status.peers:
        connection = "Direct" if peer.direct else f"Relay {peer.relay}"
        rows.append([
            peer.hostname,
            peer.ip,
            "Yes" if peer.online else "No",
            connection,
            peer.rx_bytes,
            peer.tx_bytes,
        ])
    return rows


def render_interface(info: Optional[InterfaceInfo]) -> str:
    if info is None:
        return f"<div>{escape(NO_INTERFACE_MESSAGE)}</div>"

    rows = ['<tr class="tr"><th class="th" colspan="2">Network Interface Information</th></tr>']
    rows.extend(_row(pair) for pair in interface_rows(info))
    return '<table class="table">' + "".join(rows) + "</table>"


def render_peers(status: PeerStatus) -> str:
    if status.error:
        return f'<div class="alert-message warning">{escape(status.error)}</div>'
    if not status.peers:
        return f"<div>{escape(NO_PEERS_MESSAGE)}</div>"

    rows = [_row(PEER_COLUMNS, tag="th")]
    rows.extend(_row(cells) for cells in peer_rows(status))
    return '<table class="table">' + "".join(rows) + "</table>"


def render_status(view: StatusView) -> str:
    return (
        f'<h2 class="content">{escape(TITLE)}</h2>'
        f'<div class="cbi-map-descr">{escape(DESCRIPTION)}</div>'
        f"<div>{render_interface(view.interface_info)}</div>"
        f"<div>{render_peers(view.peer_status)}</div>"
    )


def render_page(view: StatusView, refresh: Optional[int] = None) -> str:
    """Wrap the status fragment in a standalone document."""
    meta = f'<meta http-equiv="refresh" content="{int(refresh)}">' if refresh else ""
    return (
        "<!DOCTYPE html><html><head>"
        f'<meta charset="utf-8">{meta}<title>{escape(TITLE)}</title>'
        f"</head><body>{render_status(view)}</body></html>"
    )
