from enum import Enum
from typing import Any


class EventType(Enum):
    """Supported GitHub event types."""

    ISSUES = "issues"
    # Add other event types here as we support them


class WebhookEvent:
    """
    A representation of an incoming webhook event, before it has been
    validated against the model of the handler that consumes it.
    """

    def __init__(self, event_type: EventType, payload: dict[str, Any]):
        self.event_type = event_type
        self.payload = payload
        self.action: str | None = payload.get("action")
        self.repository = payload.get("repository") or {}
        self.installation_id = (payload.get("installation") or {}).get("id")

    @property
    def name(self) -> str:
        """Dispatch name of the event, e.g. 'issues.labeled'."""
        if self.action:
            return f"{self.event_type.value}.{self.action}"
        return self.event_type.value

    @property
    def repo_full_name(self) -> str:
        """The full name of the repository (e.g., 'owner/repo')."""
        return self.repository.get("full_name", "")
