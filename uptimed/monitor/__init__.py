"""uptimed.monitor: probing, scan passes and the scan scheduler."""

from uptimed.monitor.models import Failure, ProbeOutcome, ScanSummary, Success
from uptimed.monitor.prober import TargetProber
from uptimed.monitor.runner import AlertSink, ScanRunner, read_targets
from uptimed.monitor.scheduler import ScanScheduler, SchedulerState

__all__ = [
    "AlertSink",
    "Failure",
    "ProbeOutcome",
    "ScanRunner",
    "ScanScheduler",
    "ScanSummary",
    "SchedulerState",
    "Success",
    "TargetProber",
    "read_targets",
]
