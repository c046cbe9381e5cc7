"""Event publisher port.

Business operations announce state changes through this port. Publishing
must not block the caller or raise delivery failures back into it.
"""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol

from src.domain.models.webhook import WebhookEventType


class EventPublisherProtocol(Protocol):
    """Protocol for fire-and-forget event publication."""

    @abstractmethod
    def dispatch(self, event_type: WebhookEventType, payload: Mapping[str, Any]) -> None:
        """Schedule delivery of an event to every interested subscriber."""
        ...
