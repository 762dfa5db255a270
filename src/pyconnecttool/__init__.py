"""pyconnecttool - Async control panel core for the ConnectTool background service."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyconnecttool")
except PackageNotFoundError:
    __version__ = "0+local"
from pyconnecttool.config import ConnectToolConfig
from pyconnecttool.exceptions import (
    BusyError,
    CommandError,
    ConnectToolConfigError,
    ConnectToolError,
    RemoteFailure,
    TransportError,
)
from pyconnecttool.gateway import CommandGateway
from pyconnecttool.models import (
    ActionResult,
    FirewallOverall,
    FirewallStatus,
    LifecyclePhase,
    LifecycleState,
    LobbySnapshot,
    SteamSnapshot,
    VpnSnapshot,
)
from pyconnecttool.panel import ControlPanel
from pyconnecttool.poller import Poller
from pyconnecttool.state.events import NotificationEvent, NotificationKind, SectionSnapshot, StateSection
from pyconnecttool.state.notifications import NotificationCenter
from pyconnecttool.state.store import SnapshotStore
from pyconnecttool.supervisor import ServiceSupervisor

__all__ = [
    "__version__",
    "ActionResult",
    "BusyError",
    "CommandError",
    "CommandGateway",
    "ConnectToolConfig",
    "ConnectToolConfigError",
    "ConnectToolError",
    "ControlPanel",
    "FirewallOverall",
    "FirewallStatus",
    "LifecyclePhase",
    "LifecycleState",
    "LobbySnapshot",
    "NotificationCenter",
    "NotificationEvent",
    "NotificationKind",
    "Poller",
    "RemoteFailure",
    "SectionSnapshot",
    "ServiceSupervisor",
    "SnapshotStore",
    "StateSection",
    "SteamSnapshot",
    "TransportError",
    "VpnSnapshot",
]
