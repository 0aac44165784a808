# File: tests/test_alerts.py
import json
import sys

import pytest
from uptimed.alerts import DesktopAlertSink, LogAlertSink, alert_text, build_sink
from uptimed.errors import AlertSinkError


def test_alert_text():
    assert alert_text("http://x.example", "503") == (
        "http://x.example is down!",
        "Responded with status code: 503",
    )


@pytest.mark.asyncio()
async def test_desktop_sink_passes_summary_and_body(tmp_path):
    out = tmp_path / "argv.json"
    script = f"import json, sys; open({str(out)!r}, 'w').write(json.dumps(sys.argv[1:]))"
    sink = DesktopAlertSink(command=(sys.executable, "-c", script))

    await sink.notify("http://x.example", "503")

    assert json.loads(out.read_text()) == [
        "http://x.example is down!",
        "Responded with status code: 503",
    ]


@pytest.mark.asyncio()
async def test_desktop_sink_nonzero_exit_raises():
    script = "import sys; sys.stderr.write('no dbus'); sys.exit(3)"
    sink = DesktopAlertSink(command=(sys.executable, "-c", script))
    with pytest.raises(AlertSinkError, match="exited with code 3: no dbus"):
        await sink.notify("http://x.example", "404")


@pytest.mark.asyncio()
async def test_desktop_sink_missing_binary_raises(tmp_path):
    sink = DesktopAlertSink(command=(str(tmp_path / "notify-send"),))
    with pytest.raises(AlertSinkError, match="Cannot run"):
        await sink.notify("http://x.example", "404")


@pytest.mark.asyncio()
async def test_log_sink_writes_warning(project_caplog):
    await LogAlertSink().notify("http://x.example", "500")
    records = [r for r in project_caplog.records if r.levelname == "WARNING"]
    assert len(records) == 1
    assert "http://x.example is down!" in records[0].getMessage()
    assert "status code: 500" in records[0].getMessage()


def test_build_sink():
    assert isinstance(build_sink("desktop"), DesktopAlertSink)
    assert isinstance(build_sink("log"), LogAlertSink)
    with pytest.raises(ValueError, match="Unknown alert sink"):
        build_sink("pager")
