import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from label_owners.core.models import WebhookEvent
from label_owners.integrations.github import GitHubClient
from label_owners.webhooks.handlers.base import EventHandler
from label_owners.webhooks.handlers.issues import EVENT_NAME as ISSUES_LABELED, IssuesLabeledEventHandler

logger = logging.getLogger(__name__)


def build_handler_table(client: GitHubClient) -> dict[str, EventHandler]:
    """
    The registration table: dispatch name (``<event>.<action>``) to handler.

    Built once at application startup.
    """
    return {
        ISSUES_LABELED: IssuesLabeledEventHandler(client),
    }


class WebhookDispatcher:
    """
    Routes webhook events to the handler registered for their dispatch name.

    The table is fixed at construction. Handler exceptions are not caught.
    """

    def __init__(self, handlers: Mapping[str, EventHandler]):
        self._handlers: Mapping[str, EventHandler] = MappingProxyType(dict(handlers))
        for name, handler in self._handlers.items():
            logger.info(f"Registered handler for {name}: {handler.__class__.__name__}")

    @property
    def event_names(self) -> list[str]:
        return list(self._handlers)

    def get_handler(self, event: WebhookEvent) -> EventHandler | None:
        return self._handlers.get(event.name)

    async def dispatch(self, event: WebhookEvent) -> dict[str, Any]:
        """
        Looks up and executes the .handle() method of the appropriate handler
        for the given event.

        Args:
            event: The WebhookEvent to be dispatched.

        Returns:
            A dictionary containing the result from the handler.
        """
        handler_instance = self.get_handler(event)

        if not handler_instance:
            logger.info(f"No handler registered for {event.name}. Skipping.")
            return {"status": "skipped", "reason": f"No handler for {event.name}"}

        handler_name = handler_instance.__class__.__name__
        logger.info(f"Dispatching event {event.name} to handler {handler_name}.")
        result = await handler_instance.handle(event)
        return {"status": "processed", "handler": handler_name, "result": result.model_dump()}
