# File: uptimed/shutdown.py
"""uptimed.shutdown: one-shot stop flag and the SIGINT/SIGTERM listener that sets it."""

from __future__ import annotations

import asyncio
import signal
import threading
from typing import Optional, Sequence

from uptimed.logger import logger

__all__ = ["ShutdownFlag", "install_signal_handlers", "SHUTDOWN_SIGNALS"]

SHUTDOWN_SIGNALS: Sequence[signal.Signals] = (signal.SIGINT, signal.SIGTERM)


class ShutdownFlag:
    """Stop request shared between the signal listener and the scheduler.

    The only transition is unset -> set; there is no way to clear it.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def request(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"ShutdownFlag(set={self.is_set()})"


def _on_signal(flag: ShutdownFlag, signum: int) -> None:
    logger.info("Received signal: %s", signal.Signals(signum).name)
    flag.request()


def install_signal_handlers(
    flag: ShutdownFlag, loop: Optional[asyncio.AbstractEventLoop] = None
) -> None:
    """Route SIGINT/SIGTERM to *flag* instead of raising KeyboardInterrupt.

    Uses the event loop's handlers when available, ``signal.signal`` otherwise
    (e.g. the Windows proactor loop).
    """
    for sig in SHUTDOWN_SIGNALS:
        if loop is not None:
            try:
                loop.add_signal_handler(sig, _on_signal, flag, sig)
                continue
            except (NotImplementedError, RuntimeError):
                pass
        signal.signal(sig, lambda signum, _frame: _on_signal(flag, signum))
