"""Firewall profile models."""

from __future__ import annotations

from enum import StrEnum

from pyconnecttool.models._base import CoreModel


class FirewallOverall(StrEnum):
    ALL_ENABLED = "all-enabled"
    ALL_DISABLED = "all-disabled"
    MIXED = "mixed"


def derive_overall_status(domain: bool, private: bool, public: bool) -> FirewallOverall:
    """Summarize the three profile flags."""
    flags = (domain, private, public)
    if all(flags):
        return FirewallOverall.ALL_ENABLED
    if not any(flags):
        return FirewallOverall.ALL_DISABLED
    return FirewallOverall.MIXED


class FirewallStatus(CoreModel):
    """Reply of ``get_firewall_status``; also the firewall snapshot.

    The overall status is derived on every read and never stored.
    """

    domain_enabled: bool = False
    private_enabled: bool = False
    public_enabled: bool = False

    @property
    def overall(self) -> FirewallOverall:
        return derive_overall_status(self.domain_enabled, self.private_enabled, self.public_enabled)
