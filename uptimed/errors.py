# File: uptimed/errors.py
"""Exceptions raised across uptimed.

Probe failures are not exceptions: see :class:`uptimed.monitor.models.Failure`.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

__all__ = ["UptimedError", "TargetSourceError", "AlertSinkError"]


class UptimedError(Exception):
    """Base class for uptimed errors."""


class TargetSourceError(UptimedError):
    """The target list could not be read. Fatal to the scan and to the process."""

    def __init__(self, path: Union[str, Path], cause: BaseException) -> None:
        super().__init__(f"Unable to read targets file {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


class AlertSinkError(UptimedError):
    """An alert could not be delivered. Aborts the rest of the current scan only."""
