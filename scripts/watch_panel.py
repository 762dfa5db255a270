#!/usr/bin/env python3
"""Run a headless control panel and print every state change.

Connects to the core's local socket, makes the usual launch-time start
attempt and then prints lifecycle transitions, section snapshots and
notifications as they happen. Handy for checking a core build without
the GUI.

Usage
-----
::

    python scripts/watch_panel.py
    python scripts/watch_panel.py --socket /tmp/connect_tool.sock --no-auto-start

Options::

    --socket PATH        Core socket path (default: CONNECTTOOL_SOCKET_PATH or platform default)
    --no-auto-start      Do not try to start the core on launch
    --duration SECONDS   Exit after this long (default: run until Ctrl-C)
    --json               Print snapshots as JSON lines
    --debug, -v          Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
import sys
from pathlib import Path
from typing import Any

_src = Path(__file__).resolve().parent.parent / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyconnecttool import (  # noqa: E402
    ConnectToolConfig,
    ConnectToolConfigError,
    ControlPanel,
    FirewallStatus,
    LifecycleState,
    NotificationEvent,
    SectionSnapshot,
)


def _describe_value(value: Any) -> str:
    if isinstance(value, FirewallStatus):
        return f"{value.overall} {value.model_dump(exclude={'raw'})}"
    if hasattr(value, "model_dump"):
        return str(value.model_dump(exclude={"raw"}, mode="json"))
    return repr(value)


def _printer(json_mode: bool) -> tuple[Any, Any, Any]:
    def on_lifecycle(state: LifecycleState) -> None:
        if json_mode:
            print(json.dumps({"lifecycle": state.model_dump(mode="json")}), flush=True)
            return
        error = f" error={state.last_error}" if state.last_error else ""
        print(f"[core] {state.phase} pid={state.pid} version={state.version}{error}", flush=True)

    def on_snapshot(snapshot: SectionSnapshot) -> None:
        if json_mode:
            payload = snapshot.value.model_dump(mode="json", exclude={"raw"})
            print(json.dumps({"section": str(snapshot.section), "revision": snapshot.revision, "value": payload}), flush=True)
            return
        print(f"[{snapshot.section} #{snapshot.revision}] {_describe_value(snapshot.value)}", flush=True)

    def on_notification(event: NotificationEvent) -> None:
        if json_mode:
            print(json.dumps({"notification": event.model_dump(mode="json")}), flush=True)
            return
        print(f"({event.kind}) {event.message}", flush=True)

    return on_lifecycle, on_snapshot, on_notification


async def run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.socket:
        overrides["socket_path"] = args.socket
    if args.no_auto_start:
        overrides["auto_start"] = False
    try:
        config = ConnectToolConfig.from_env(**overrides)
    except ConnectToolConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    panel = ControlPanel(config)
    on_lifecycle, on_snapshot, on_notification = _printer(args.json_mode)
    panel.supervisor.subscribe(on_lifecycle)
    panel.store.subscribe(on_snapshot)
    panel.notifications.subscribe(on_notification)

    async with panel:
        if args.duration:
            await asyncio.sleep(args.duration)
        else:
            await asyncio.Event().wait()
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Watch a headless ConnectTool control panel.")
    parser.add_argument("--socket", help="Core socket path")
    parser.add_argument("--no-auto-start", action="store_true", help="Do not start the core on launch")
    parser.add_argument("--duration", type=float, default=0.0, help="Exit after this many seconds")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Print JSON lines")
    parser.add_argument("--debug", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    with contextlib.suppress(KeyboardInterrupt):
        sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
