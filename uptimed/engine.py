# File: uptimed/engine.py
"""uptimed.engine: wires the HTTP session, prober, runner and scheduler for the CLI."""

from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientSession

from uptimed.config import MonitorConfig
from uptimed.monitor.models import ScanSummary
from uptimed.monitor.prober import TargetProber
from uptimed.monitor.runner import AlertSink, ScanRunner
from uptimed.monitor.scheduler import ScanScheduler
from uptimed.shutdown import ShutdownFlag, install_signal_handlers

__all__ = ["start_monitor", "scan_once"]


async def start_monitor(
    config: MonitorConfig,
    sink: AlertSink,
    shutdown: Optional[ShutdownFlag] = None,
) -> None:
    """
    Run the scan loop until SIGINT/SIGTERM.

    When *shutdown* is given the caller owns it and no signal handlers are
    installed.
    """
    if shutdown is None:
        shutdown = ShutdownFlag()
        install_signal_handlers(shutdown, asyncio.get_running_loop())

    async with ClientSession() as session:
        runner = ScanRunner(config, TargetProber(session), sink)
        scheduler = ScanScheduler(runner, config.scan_interval, shutdown)
        await scheduler.run()


async def scan_once(config: MonitorConfig, sink: AlertSink) -> ScanSummary:
    """Single pass over the targets, for ``uptimed scan``."""
    async with ClientSession() as session:
        runner = ScanRunner(config, TargetProber(session), sink)
        return await runner.run_scan()
