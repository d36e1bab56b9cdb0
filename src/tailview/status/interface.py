"""
Interface statistics for the tailnet interface.

Collects byte counters and MTU from sysfs and the addresses reported by
`ip addr show`. If none of those sources know about the interface it is
reported as absent.
"""

import os
import re
import logging
from typing import Callable, Optional, Tuple

from tailview.status.formatting import format_megabytes
from tailview.status.models import InterfaceInfo
from tailview.status.system import CommandError, read_sysfs, run_command

logger = logging.getLogger(__name__)

IPV4_RE = re.compile(r"^\s*inet\s+(\d{1,3}(?:\.\d{1,3}){3})")
IPV6_RE = re.compile(r"^\s*inet6\s+([0-9a-fA-F:]+)")


def parse_addresses(output: str) -> Tuple[str, str]:
    """
    Extract the first IPv4 and the first non link-local IPv6 address from
    `ip addr show` output. Missing addresses are returned as "-".
    """
    ipv4 = None
    ipv6 = None

    for line in output.splitlines():
        if ipv4 is None:
            match = IPV4_RE.match(line)
            if match:
                ipv4 = match.group(1)
        if ipv6 is None:
            match = IPV6_RE.match(line)
            if match and not match.group(1).lower().startswith("fe80"):
                ipv6 = match.group(1)
        if ipv4 and ipv6:
            break

    return ipv4 or "-", ipv6 or "-"


def _format_counter(raw: Optional[str]) -> str:
    # An unreadable counter shows "-", a garbled one shows "0 MB"
    if not raw:
        return "-"
    try:
        return format_megabytes(int(raw.strip()))
    except ValueError:
        return format_megabytes(0)


class InterfaceStatsCollector:
    def __init__(
        self,
        interface: str,
        sysfs_net_dir: str = "/sys/class/net",
        ip_command: str = "/sbin/ip",
        timeout: Optional[float] = None,
        reader: Callable[[str], Optional[str]] = read_sysfs,
        runner=run_command,
    ):
        self.interface = interface
        self.sysfs_net_dir = sysfs_net_dir
        self.ip_command = ip_command
        self.timeout = timeout
        self._read = reader
        self._run = runner

    def _sysfs_path(self, *parts: str) -> str:
        return os.path.join(self.sysfs_net_dir, self.interface, *parts)

    async def _show_addresses(self):
        try:
            return await self._run(
                [self.ip_command, "addr", "show", self.interface],
                timeout=self.timeout,
            )
        except CommandError as e:
            logger.debug(f"Address listing for {self.interface} failed: {e}")
            return None

    async def collect(self) -> Optional[InterfaceInfo]:
        """
        Returns InterfaceInfo, or None when the interface does not exist.
        """
        rx_raw = self._read(self._sysfs_path("statistics", "rx_bytes"))
        tx_raw = self._read(self._sysfs_path("statistics", "tx_bytes"))
        mtu_raw = self._read(self._sysfs_path("mtu"))
        addr_result = await self._show_addresses()

        addr_ok = addr_result is not None and addr_result.code == 0
        if not rx_raw and not mtu_raw and not addr_ok:
            logger.debug(f"Interface {self.interface} not found")
            return None

        ipv4, ipv6 = "-", "-"
        if addr_ok and addr_result.stdout:
            ipv4, ipv6 = parse_addresses(addr_result.stdout)

        return InterfaceInfo(
            name=self.interface,
            rx_bytes=_format_counter(rx_raw),
            tx_bytes=_format_counter(tx_raw),
            mtu=(mtu_raw or "").strip() or "-",
            ipv4=ipv4,
            ipv6=ipv6,
        )
