# uptimed/monitor/models.py
"""
Data models for the uptimed monitor.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(slots=True, frozen=True)
class Success:
    """The target answered with a success status."""

    url: str


@dataclass(slots=True, frozen=True)
class Failure:
    """The target answered with a non-success status, or could not be reached.

    ``status`` is the HTTP status code. For transport errors that carry no
    status it holds the coarse fallback code (404); ``error`` then has the
    transport error text.
    """

    url: str
    status: int
    error: Optional[str] = None

    @property
    def reason(self) -> str:
        return str(self.status)


ProbeOutcome = Union[Success, Failure]


@dataclass(slots=True)
class ScanSummary:
    """Counters for one pass over the target list."""

    probed: int = 0
    failed: int = 0
    duration: float = 0.0
