"""Slack incoming-webhook gateway."""

import logging
from typing import Optional

import requests

from .base import DeliveryError, NotificationGateway
from ..config.external_services.slack import SlackConfig, get_slack_config

logger = logging.getLogger(__name__)

class SlackWebhookGateway(NotificationGateway):
    """Posts messages to a Slack channel through an incoming webhook."""

    def __init__(self, webhook_url: str, timeout: Optional[float] = None):
        """
        Initialize the gateway.

        Args:
            webhook_url: Incoming webhook URL. An empty value is accepted here
                and reported as a DeliveryError on every send.
            timeout: Seconds to wait for Slack, None for the transport default
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: SlackConfig) -> 'SlackWebhookGateway':
        return cls(webhook_url=config.webhook_url, timeout=config.timeout)

    def send(self, message: str) -> None:
        if not self.webhook_url:
            raise DeliveryError("Slack webhook URL is not configured")

        try:
            response = requests.post(
                self.webhook_url,
                json={"text": message},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Failed to reach Slack webhook: {e}")
            raise DeliveryError(f"Failed to send Slack request: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Slack webhook answered {response.status_code}: {response.text[:200]}")
            raise DeliveryError(f"Unexpected response from Slack: {response.status_code}")

        logger.debug("Slack notification delivered")

def create_slack_gateway() -> SlackWebhookGateway:
    """Build the gateway from the environment configuration."""
    return SlackWebhookGateway.from_config(get_slack_config())
