from abc import ABC, abstractmethod

from label_owners.core.models import WebhookEvent
from label_owners.webhooks.models import WebhookResponse


class EventHandler(ABC):
    """
    Abstract base class for all webhook event handlers.

    Each implementation must return a WebhookResponse for standardized results.
    """

    @abstractmethod
    async def handle(self, event: WebhookEvent) -> WebhookResponse:
        """
        Process the incoming webhook event.

        Args:
            event: The WebhookEvent routed to this handler.

        Returns:
            A WebhookResponse containing the results of the handling logic.
        """
        pass
