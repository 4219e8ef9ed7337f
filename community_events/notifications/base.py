"""Base interface that all notification gateways must implement."""

from abc import ABC, abstractmethod

class DeliveryError(Exception):
    """Raised when a message could not be delivered to the external channel."""
    pass

class NotificationGateway(ABC):
    """
    Base interface for sending a single text message to a human channel.

    A gateway is:
    1. Synchronous: ``send`` returns only after the channel has answered
    2. Stateless between calls
    3. Never retrying: one call means one delivery attempt
    """

    @abstractmethod
    def send(self, message: str) -> None:
        """
        Deliver one message.

        Args:
            message: Plain text body

        Raises:
            DeliveryError: If the destination is not configured, the
                transport fails, or the channel answers with a non-2xx status
        """
        pass
