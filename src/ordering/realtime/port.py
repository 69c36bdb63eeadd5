"""Realtime channel port: abstract interface for per-user push events."""

from abc import ABC, abstractmethod


class RealtimePort(ABC):
    """Abstract interface for per-user addressable realtime channels."""

    @abstractmethod
    def emit(self, user_id: str, event_name: str, payload: dict) -> dict:
        """Push ``payload`` as ``event_name`` to everything subscribed for ``user_id``.

        Returns:
            dict with keys: status ("sent" or "failed"), error (optional)
        """
        ...
