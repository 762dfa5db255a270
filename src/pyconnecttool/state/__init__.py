"""State layer.

This package is the single source of truth that views read: one immutable
snapshot per domain plus a stream of notification requests. Reconcilers
are the only writers.
"""
