"""Internal constants shared across the library."""

import sys

WINDOWS_SOCKET_PATH = "connect_tool.sock"
POSIX_SOCKET_PATH = "/tmp/connect_tool.sock"  # noqa: S108

# The HTTP host is ignored by the unix-socket connector but aiohttp needs a URL.
SOCKET_BASE_URL = "http://connecttool"
USER_AGENT = "pyconnecttool"

DEFAULT_REQUEST_TIMEOUT = 5.0

# ------------------------------------------------------------------
# Refresh cadence (seconds)
# ------------------------------------------------------------------

CORE_STATUS_INTERVAL = 5.0
LOBBY_INTERVAL = 2.0
VPN_INTERVAL = 2.0
STEAM_INTERVAL = 2.0
FIREWALL_INTERVAL = 5.0

NOTIFICATION_TTL = 5.0
# Pause between stopping the core and issuing a conflicting mutation.
DEPENDENCY_SETTLE_DELAY = 0.5
POST_RESTART_REFRESH_DELAY = 3.0


def default_socket_path() -> str:
    """Platform default location of the core's command socket."""
    if sys.platform == "win32":
        return WINDOWS_SOCKET_PATH
    return POSIX_SOCKET_PATH
