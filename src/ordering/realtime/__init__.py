"""Realtime channel registry.

Holds the process-wide realtime adapter. The in-memory fake is used until a
real socket gateway is installed with set_realtime_channel(); installing None
disables realtime pushes entirely.
"""

from ordering.realtime.port import RealtimePort

_UNSET = object()
_channel: object = _UNSET


def get_realtime_channel() -> RealtimePort | None:
    """Return the configured realtime adapter, or None when pushes are disabled."""
    global _channel
    if _channel is _UNSET:
        from ordering.realtime.fake import FakeRealtimeAdapter

        _channel = FakeRealtimeAdapter()
    return _channel


def set_realtime_channel(channel: RealtimePort | None) -> None:
    global _channel
    _channel = channel


def reset_realtime_channel() -> None:
    """Drop the configured adapter so the next lookup builds a fresh fake."""
    global _channel
    _channel = _UNSET
