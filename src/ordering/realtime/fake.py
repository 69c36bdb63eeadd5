"""Fake realtime adapter: records emitted events for testing."""

from ordering.realtime.port import RealtimePort


class FakeRealtimeAdapter(RealtimePort):
    """Realtime adapter that records events in memory for test assertions."""

    def __init__(self):
        self.emitted: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Realtime channel unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Realtime channel unavailable"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def emit(self, user_id: str, event_name: str, payload: dict) -> dict:
        if not self.should_succeed:
            return {"status": "failed", "error": self.failure_reason}

        self.emitted.append(
            {
                "user_id": str(user_id),
                "event": event_name,
                "payload": payload,
            }
        )
        return {"status": "sent"}

    def events_for(self, user_id: str) -> list[dict]:
        return [record for record in self.emitted if record["user_id"] == str(user_id)]

    def reset(self):
        """Clear emitted events (useful between tests)."""
        self.emitted.clear()
        self.should_succeed = True
        self.failure_reason = "Realtime channel unavailable"
