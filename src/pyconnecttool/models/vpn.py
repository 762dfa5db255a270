"""VPN status and routing table models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyconnecttool.formatting import format_bytes, ip_to_string
from pyconnecttool.models._base import CoreModel, Counter


class VpnStats(CoreModel):
    """Tunnel traffic counters."""

    packets_sent: Counter = 0
    bytes_sent: Counter = 0
    packets_received: Counter = 0
    bytes_received: Counter = 0
    packets_dropped: Counter = 0

    @property
    def sent_display(self) -> str:
        return format_bytes(self.bytes_sent)

    @property
    def received_display(self) -> str:
        return format_bytes(self.bytes_received)


class VpnRoute(CoreModel):
    """One routing table entry; ``ip`` is a 32-bit address."""

    ip: int
    name: str = ""
    is_local: bool = False

    @property
    def address(self) -> str:
        return ip_to_string(self.ip)


class VpnStatus(CoreModel):
    """Reply of ``get_vpn_status``."""

    enabled: bool = False
    local_ip: str = ""
    device_name: str = ""
    stats: VpnStats | None = None


class VpnRoutingTable(CoreModel):
    """Reply of ``get_vpn_routing_table``."""

    routes: tuple[VpnRoute, ...] = ()


class VpnSnapshot(BaseModel):
    """Combined VPN status and routing table for one refresh.

    When the tunnel is disabled ``stats`` is ``None`` and ``routes`` is
    empty.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = False
    local_ip: str = ""
    device_name: str = ""
    stats: VpnStats | None = None
    routes: tuple[VpnRoute, ...] = ()

    @classmethod
    def disabled(cls) -> VpnSnapshot:
        return cls()

    @classmethod
    def combine(cls, status: VpnStatus, table: VpnRoutingTable) -> VpnSnapshot:
        return cls(
            enabled=True,
            local_ip=status.local_ip,
            device_name=status.device_name,
            stats=status.stats,
            routes=table.routes,
        )
