"""Outbound notifications to the moderation channel."""

from .base import DeliveryError, NotificationGateway
from .slack import SlackWebhookGateway, create_slack_gateway

__all__ = [
    'DeliveryError',
    'NotificationGateway',
    'SlackWebhookGateway',
    'create_slack_gateway',
]
