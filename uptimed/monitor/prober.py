# uptimed/monitor/prober.py
"""
Prober: one HTTP GET per call, classified into Success or Failure.

No retries, no timeout override (the session's default applies) and no
logging here: the caller decides what to do with the outcome.
"""
from __future__ import annotations

import asyncio
from typing import Final, Sequence, Tuple

from aiohttp import ClientError, ClientSession
from multidict import CIMultiDict

from uptimed.monitor.models import Failure, ProbeOutcome, Success

__all__ = ["TargetProber", "FALLBACK_STATUS"]

#: Status reported for transport errors that carry no HTTP status.
FALLBACK_STATUS: Final[int] = 404


class TargetProber:
    """Checks single targets through a shared :class:`aiohttp.ClientSession`."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def probe(self, url: str, headers: Sequence[Tuple[str, str]] = ()) -> ProbeOutcome:
        # CIMultiDict keeps repeated names, so every value goes on the wire
        request_headers = CIMultiDict(headers)
        try:
            async with self.session.get(url, headers=request_headers) as resp:
                if resp.ok:
                    return Success(url)
                return Failure(url, resp.status)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            # ClientResponseError (e.g. too many redirects) has a status, connection errors do not
            status = getattr(exc, "status", None) or FALLBACK_STATUS
            return Failure(url, status, error=str(exc) or type(exc).__name__)
