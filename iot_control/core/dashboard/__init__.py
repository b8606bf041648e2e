from .dashboard import Dashboard, LED_ON_LABEL, LED_OFF_LABEL
from .registry import DashboardRegistry
from .stream import stream_snapshots, format_event

__all__ = [
    "Dashboard",
    "LED_ON_LABEL",
    "LED_OFF_LABEL",
    "DashboardRegistry",
    "stream_snapshots",
    "format_event"
]
