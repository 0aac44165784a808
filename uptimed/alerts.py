# File: uptimed/alerts.py
"""uptimed.alerts: delivery of "target is down" alerts to the operator."""

from __future__ import annotations

import asyncio
from typing import Dict, Final, Sequence, Type

from uptimed.errors import AlertSinkError
from uptimed.logger import logger

__all__ = ["DesktopAlertSink", "LogAlertSink", "SINKS", "build_sink", "alert_text"]


def alert_text(target: str, reason: str) -> tuple[str, str]:
    """Summary and body shown to the operator for a failed target."""
    return f"{target} is down!", f"Responded with status code: {reason}"


class DesktopAlertSink:
    """Desktop notification through the freedesktop ``notify-send`` utility."""

    COMMAND: Final[Sequence[str]] = ("notify-send", "--app-name=uptimed")

    def __init__(self, command: Sequence[str] = COMMAND) -> None:
        self.command = tuple(command)

    async def notify(self, target: str, reason: str) -> None:
        summary, body = alert_text(target, reason)
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command,
                summary,
                body,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await proc.communicate()
        except OSError as exc:
            raise AlertSinkError(f"Cannot run {self.command[0]}: {exc}") from exc
        if proc.returncode != 0:
            detail = stderr.decode(errors="replace").strip()
            raise AlertSinkError(
                f"{self.command[0]} exited with code {proc.returncode}" + (f": {detail}" if detail else "")
            )


class LogAlertSink:
    """Writes alerts to the project log; for headless machines."""

    async def notify(self, target: str, reason: str) -> None:
        summary, body = alert_text(target, reason)
        logger.warning("ALERT %s %s", summary, body)


SINKS: Dict[str, Type] = {
    "desktop": DesktopAlertSink,
    "log": LogAlertSink,
}


def build_sink(kind: str):
    """Instantiate the alert sink registered under *kind*."""
    try:
        return SINKS[kind]()
    except KeyError:
        raise ValueError(f"Unknown alert sink {kind!r}, expected one of: {', '.join(SINKS)}") from None
