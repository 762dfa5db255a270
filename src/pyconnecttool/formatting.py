"""Display helpers for route addresses and traffic counters."""

from __future__ import annotations

_BYTE_UNITS = ("B", "KB", "MB", "GB")


def ip_to_string(ip: int) -> str:
    """Render a 32-bit route address (network byte order) as a dotted quad."""
    value = int(ip) & 0xFFFFFFFF
    return ".".join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def format_bytes(num_bytes: int) -> str:
    """Human readable byte count with 1024 steps, capped at GB.

    >>> format_bytes(1536)
    '1.5 KB'
    """
    if num_bytes <= 0:
        return "0 B"
    scaled = float(num_bytes)
    index = 0
    while scaled >= 1024 and index < len(_BYTE_UNITS) - 1:
        scaled /= 1024
        index += 1
    text = f"{scaled:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_BYTE_UNITS[index]}"
