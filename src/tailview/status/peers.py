"""
Peer status from `tailscale status --json`.

Every failure is turned into a displayable PeerStatus.error message so the
view always has something to render.
"""

import json
import logging
from typing import Any, Dict, Optional

from tailview.status.formatting import format_megabytes
from tailview.status.models import PeerStatus, PeerSummary
from tailview.status.system import CommandError, run_command

logger = logging.getLogger(__name__)

PERMISSION_DENIED_MESSAGE = "Permission denied: cannot query the Tailscale daemon."
NOT_RUNNING_MESSAGE = "Tailscale is not running."
EMPTY_OUTPUT_MESSAGE = "Tailscale status returned no output."


def classify_failure(message: str) -> str:
    """Map a raw command failure to the message shown to the user."""
    if "Permission" in message:
        return PERMISSION_DENIED_MESSAGE
    if "not running" in message or "stopped" in message:
        return NOT_RUNNING_MESSAGE
    return f"Failed to get Tailscale status: {message.strip()}"


def _counter(value: Any) -> str:
    try:
        count = int(value or 0)
    except (TypeError, ValueError):
        count = 0
    return format_megabytes(count) if count else "-"


def _hostname(peer: Dict[str, Any]) -> str:
    dns_name = peer.get("DNSName")
    if isinstance(dns_name, str) and dns_name.split(".")[0]:
        return dns_name.split(".")[0]
    host_name = peer.get("HostName")
    if isinstance(host_name, str) and host_name:
        return host_name
    return "-"


def build_peer_summary(peer: Any) -> PeerSummary:
    """Build a summary from one entry of the `Peer` mapping."""
    if not isinstance(peer, dict):
        peer = {}

    ips = peer.get("TailscaleIPs")
    ip = ips[0] if isinstance(ips, list) and ips and ips[0] else "-"

    return PeerSummary(
        ip=str(ip),
        hostname=_hostname(peer),
        online=bool(peer.get("Online")),
        relay=str(peer.get("Relay") or "-"),
        direct=bool(peer.get("CurAddr")),
        rx_bytes=_counter(peer.get("RxBytes")),
        tx_bytes=_counter(peer.get("TxBytes")),
    )


def parse_peer_status(output: str) -> PeerStatus:
    """Parse the JSON printed by a successful `tailscale status --json`."""
    if not output or not output.strip():
        return PeerStatus(error=EMPTY_OUTPUT_MESSAGE)

    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON from tailscale status: {e}")
        return PeerStatus(error=f"Failed to parse Tailscale status: {e}")

    peers = data.get("Peer") if isinstance(data, dict) else None
    if not isinstance(peers, dict):
        peers = {}

    return PeerStatus(peers=[build_peer_summary(peer) for peer in peers.values()])


class PeerStatusCollector:
    def __init__(
        self,
        tailscale_command: str = "tailscale",
        timeout: Optional[float] = None,
        runner=run_command,
    ):
        self.tailscale_command = tailscale_command
        self.timeout = timeout
        self._run = runner

    async def collect(self) -> PeerStatus:
        try:
            result = await self._run(
                [self.tailscale_command, "status", "--json"],
                timeout=self.timeout,
            )
        except CommandError as e:
            logger.warning(f"Could not run {self.tailscale_command}: {e}")
            return PeerStatus(error=classify_failure(str(e)))

        if result.code != 0:
            message = result.stderr.strip() or result.stdout.strip() or f"exit code {result.code}"
            logger.info(f"tailscale status exited with {result.code}: {message}")
            return PeerStatus(error=classify_failure(message))

        return parse_peer_status(result.stdout)
