"""Per-domain reconcilers that keep the snapshot store current."""

from pyconnecttool.reconcilers._base import Reconciler
from pyconnecttool.reconcilers.firewall import FirewallReconciler
from pyconnecttool.reconcilers.lobby import LobbyReconciler
from pyconnecttool.reconcilers.steam import SteamReconciler
from pyconnecttool.reconcilers.vpn import VpnReconciler

__all__ = [
    "FirewallReconciler",
    "LobbyReconciler",
    "Reconciler",
    "SteamReconciler",
    "VpnReconciler",
]
