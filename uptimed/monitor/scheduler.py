# === FILE: uptimed/monitor/scheduler.py ===
"""
Scan scheduler: decides when a new pass over the targets starts and stops the
loop between passes once shutdown has been requested.
"""
from __future__ import annotations

import asyncio
import enum
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Awaitable, Callable, Final, Optional

from uptimed.errors import AlertSinkError, TargetSourceError
from uptimed.logger import logger
from uptimed.monitor.runner import ScanRunner
from uptimed.shutdown import ShutdownFlag

__all__ = ["ScanScheduler", "ScanClock", "SchedulerState", "IDLE_POLL_INTERVAL"]

#: Seconds between due/shutdown checks while idle.
IDLE_POLL_INTERVAL: Final[float] = 0.05


class SchedulerState(enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    STOPPED = "stopped"


@dataclass(slots=True)
class ScanClock:
    """Start time of the last scan; ``None`` means no scan has run yet."""

    last_scan_started_at: Optional[float] = None

    def is_due(self, now: float, interval: float) -> bool:
        if self.last_scan_started_at is None:
            return True
        return now - self.last_scan_started_at >= interval

    def stamp(self, now: float) -> None:
        self.last_scan_started_at = now


class ScanScheduler:
    """Cooperative loop running one :class:`ScanRunner` pass at a time."""

    def __init__(
        self,
        runner: ScanRunner,
        scan_interval: timedelta,
        shutdown: ShutdownFlag,
        *,
        poll_interval: float = IDLE_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.runner = runner
        self.scan_interval = scan_interval.total_seconds()
        self.shutdown = shutdown
        self.poll_interval = poll_interval
        self.scan_clock = ScanClock()
        self.state = SchedulerState.IDLE
        self.scans_started = 0
        self._clock = clock
        self._sleep = sleep

    async def run(self) -> None:
        """Run until shutdown is requested or the target list becomes unreadable.

        Raises TargetSourceError (after entering STOPPED) when a scan cannot
        read its targets. AlertSinkError only ends the scan it came from.
        """
        logger.info("Monitor started, scan interval %.0f s", self.scan_interval)
        while not self.shutdown.is_set():
            now = self._clock()
            if not self.scan_clock.is_due(now, self.scan_interval):
                await self._sleep(self.poll_interval)
                continue

            self.scan_clock.stamp(now)
            self.state = SchedulerState.SCANNING
            self.scans_started += 1
            try:
                await self.runner.run_scan()
            except AlertSinkError as exc:
                logger.error("Scan aborted, alert could not be delivered: %s", exc)
            except TargetSourceError:
                self.state = SchedulerState.STOPPED
                raise
            self.state = SchedulerState.IDLE

        self.state = SchedulerState.STOPPED
        logger.info("Monitor stopped after %d scan(s)", self.scans_started)
