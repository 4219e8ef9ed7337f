"""Forwards contact-form messages to the moderation channel."""

import logging

from .notifications import NotificationGateway

logger = logging.getLogger(__name__)

CONTACT_MESSAGE = (
    "A new contact inquiry has arrived.\n"
    "Name: {name}\n"
    "Email: {email}\n"
    "Message: {message}"
)

class ContactNotifier:
    """Sends contact inquiries; nothing is stored."""

    def __init__(self, gateway: NotificationGateway):
        self.gateway = gateway

    def notify(self, name: str, email: str, message: str) -> None:
        """
        Raises:
            DeliveryError: If the message cannot be delivered
        """
        self.gateway.send(CONTACT_MESSAGE.format(name=name, email=email, message=message))
        logger.info("Contact inquiry forwarded")
