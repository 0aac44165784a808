# === FILE: uptimed/monitor/runner.py ===
"""Scan runner: one sequential, paced pass over the target list."""
from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import Awaitable, Callable, List, Protocol, Sequence

from uptimed.config import MonitorConfig
from uptimed.errors import TargetSourceError
from uptimed.logger import logger
from uptimed.monitor.models import Failure, ProbeOutcome, ScanSummary
from uptimed.monitor.prober import TargetProber

__all__ = ("AlertSink", "ScanRunner", "read_targets")

SleepFunc = Callable[[float], Awaitable[None]]


class AlertSink(Protocol):
    """Anything that can surface a failed target to the operator.

    ``notify`` raises :class:`uptimed.errors.AlertSinkError` when the alert
    cannot be delivered.
    """

    async def notify(self, target: str, reason: str) -> None: ...


def read_targets(path: Path) -> List[str]:
    """Read the target list: one URL per line, in file order.

    Lines end at LF only; a trailing CR is dropped, nothing else is
    trimmed, and empty lines are kept as empty targets.
    """
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TargetSourceError(path, exc) from exc
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


class ScanRunner:
    """One pass over the target list with fixed pacing between requests."""

    def __init__(
        self,
        config: MonitorConfig,
        prober: TargetProber,
        sink: AlertSink,
        *,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.config = config
        self.prober = prober
        self.sink = sink
        self._sleep = sleep

    async def run_scan(self) -> ScanSummary:
        """Read the targets afresh and probe them all.

        Raises TargetSourceError before any probe if the list cannot be read,
        and lets AlertSinkError through, which skips the remaining targets.
        """
        targets = read_targets(self.config.targets_path)
        return await self.probe_targets(targets)

    async def probe_targets(self, targets: Sequence[str]) -> ScanSummary:
        logger.info("Scan started: %d targets from %s", len(targets), self.config.targets_path)
        start = time.monotonic()
        summary = ScanSummary()
        headers = self.config.header_pairs
        pause = self.config.request_interval.total_seconds()

        for index, url in enumerate(targets):
            outcome: ProbeOutcome = await self.prober.probe(url, headers)
            summary.probed += 1
            if isinstance(outcome, Failure):
                summary.failed += 1
                logger.warning(
                    "%s is down (status %s)%s",
                    outcome.url,
                    outcome.reason,
                    f": {outcome.error}" if outcome.error else "",
                )
                await self.sink.notify(outcome.url, outcome.reason)
            else:
                logger.debug("%s is up", url)

            if pause > 0 and index < len(targets) - 1:
                await self._sleep(pause)

        summary.duration = time.monotonic() - start
        logger.info(
            "Scan finished: %d probed, %d failed in %.2f s",
            summary.probed,
            summary.failed,
            summary.duration,
        )
        return summary
