# File: tests/conftest.py
from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest
import pytest_asyncio
from aiohttp import web

from uptimed.config import MonitorConfig
from uptimed.errors import AlertSinkError
from uptimed.logger import LOGGER_NAME, init_logging
from uptimed.monitor.models import Failure, ProbeOutcome, Success


# --------------------------------------------------------------------------- #
#                               Test doubles                                  #
# --------------------------------------------------------------------------- #


class FakeProber:
    """Records every probe; outcome per URL from *statuses* (200 -> Success)."""

    def __init__(self, statuses: Optional[Dict[str, int]] = None, default: int = 200) -> None:
        self.statuses = statuses or {}
        self.default = default
        self.calls: List[Tuple[str, List[Tuple[str, str]]]] = []

    async def probe(self, url: str, headers: Sequence[Tuple[str, str]] = ()) -> ProbeOutcome:
        self.calls.append((url, list(headers)))
        status = self.statuses.get(url, self.default)
        if status < 400:
            return Success(url)
        return Failure(url, status)

    @property
    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]


class RecordingSink:
    """Alert sink that remembers alerts; fails on the *fail_on*-th alert (1-based)."""

    def __init__(self, fail_on: Optional[int] = None) -> None:
        self.fail_on = fail_on
        self.alerts: List[Tuple[str, str]] = []

    async def notify(self, target: str, reason: str) -> None:
        self.alerts.append((target, reason))
        if self.fail_on is not None and len(self.alerts) == self.fail_on:
            raise AlertSinkError("display unavailable")


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


# --------------------------------------------------------------------------- #
#                                  Fixtures                                   #
# --------------------------------------------------------------------------- #


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests reconfigure the project logger; restore defaults afterwards."""
    yield
    init_logging()


@pytest.fixture()
def project_caplog(caplog):
    """caplog for the project logger, which does not propagate to root."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    yield caplog
    lg.removeHandler(caplog.handler)


@pytest.fixture()
def targets_file(tmp_path) -> Path:
    path = tmp_path / "targets.txt"
    path.write_text("http://example.com/a\nhttp://example.com/b\n", encoding="utf-8")
    return path


@pytest.fixture()
def make_config(targets_file) -> Callable[..., MonitorConfig]:
    """Factory for a valid MonitorConfig pointing at *targets_file*."""

    def _make(
        request_interval: str = "0s",
        scan_interval: str = "15m",
        custom_headers: Sequence[Dict[str, str]] = (),
        targets_path: Optional[Path] = None,
    ) -> MonitorConfig:
        return MonitorConfig(
            targets_path=targets_path or targets_file,
            request_interval=request_interval,
            scan_interval=scan_interval,
            custom_headers=list(custom_headers),
        )

    return _make


@dataclass
class TargetServer:
    base: str
    #: (path, Authorization values) for every request received
    requests: List[Tuple[str, List[str]]] = field(default_factory=list)


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def target_server(unused_tcp_port: int) -> AsyncIterator[TargetServer]:
    app = web.Application()
    server = TargetServer(base="")

    def record(request: web.Request) -> None:
        server.requests.append((request.path, request.headers.getall("Authorization", [])))

    async def handle_ok(request):
        record(request)
        return web.Response(text="ok")

    async def handle_down(request):
        record(request)
        return web.Response(status=503, text="maintenance")

    async def handle_missing(request):
        record(request)
        return web.Response(status=404)

    async def handle_redirect(request):
        record(request)
        raise web.HTTPFound(location="/ok")

    app.router.add_get("/ok", handle_ok)
    app.router.add_get("/down", handle_down)
    app.router.add_get("/missing", handle_missing)
    app.router.add_get("/redirect", handle_redirect)

    async for url in _serve_app(app, unused_tcp_port):
        server.base = url
        yield server
