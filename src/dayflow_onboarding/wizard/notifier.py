"""
Onboarding Event Notifiers

Fire-and-forget sinks for wizard events (step entered, step completed,
provider selected, onboarding completed).
"""

from abc import ABC, abstractmethod
from typing import Any

from dayflow_onboarding.wizard.logging_config import get_logger


logger = get_logger("events")


class Notifier(ABC):
    """Receives named wizard events."""

    @abstractmethod
    def notify(self, event: str, **properties: Any):
        """Deliver an event. Delivery is best effort."""


class NullNotifier(Notifier):
    """Drops every event."""

    def notify(self, event: str, **properties: Any):
        pass


class LoggingNotifier(Notifier):
    """Writes every event to the onboarding event log."""

    def notify(self, event: str, **properties: Any):
        if properties:
            logger.info("%s %s", event, properties)
        else:
            logger.info("%s", event)
