import asyncio
import logging

from tailview.status.interface import InterfaceStatsCollector
from tailview.status.models import StatusView
from tailview.status.peers import PeerStatusCollector
from tailview.status.render import render_status

logger = logging.getLogger(__name__)


class TailscaleStatusView:
    """
    The status page: `load` fetches a fresh StatusView, `render` turns one
    into HTML. Both collectors run concurrently on every load.
    """

    def __init__(self, interface_collector: InterfaceStatsCollector, peer_collector: PeerStatusCollector):
        self.interface_collector = interface_collector
        self.peer_collector = peer_collector

    @classmethod
    def from_config(cls, config) -> "TailscaleStatusView":
        return cls(
            InterfaceStatsCollector(
                config.interface,
                sysfs_net_dir=config.sysfs_net_dir,
                ip_command=config.ip_command,
                timeout=config.command_timeout,
            ),
            PeerStatusCollector(
                config.tailscale_command,
                timeout=config.command_timeout,
            ),
        )

    async def load(self) -> StatusView:
        interface_info, peer_status = await asyncio.gather(
            self.interface_collector.collect(),
            self.peer_collector.collect(),
        )
        logger.debug(
            f"Loaded status: interface={'present' if interface_info else 'absent'}, "
            f"peers={len(peer_status.peers)}, error={peer_status.error}"
        )
        return StatusView(interface_info=interface_info, peer_status=peer_status)

    def render(self, view: StatusView) -> str:
        return render_status(view)
