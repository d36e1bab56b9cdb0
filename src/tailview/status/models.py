from typing import List, Optional
from pydantic import BaseModel

class InterfaceInfo(BaseModel):
    name: str
    rx_bytes: str = "-"
    tx_bytes: str = "-"
    mtu: str = "-"
    ipv4: str = "-"
    ipv6: str = "-"

class PeerSummary(BaseModel):
    ip: str = "-"
    hostname: str = "-"
    online: bool = False
    relay: str = "-"
    direct: bool = False
    rx_bytes: str = "-"
    tx_bytes: str = "-"

class PeerStatus(BaseModel):
    """Either an error message or the list of peers, never both."""
    error: Optional[str] = None
    peers: List[PeerSummary] = []

    @property
    def ok(self) -> bool:
        return self.error is None

class StatusView(BaseModel):
    interface_info: Optional[InterfaceInfo] = None
    peer_status: PeerStatus
