"""Slack incoming-webhook configuration."""

import os
from dataclasses import dataclass

from ..environment import IS_PRODUCTION_ENVIRONMENT

@dataclass
class SlackConfig:
    """Slack configuration settings."""
    
    # Incoming webhook URL of the moderation channel
    webhook_url: str = ""
    # Seconds to wait for the webhook before giving up
    timeout: float = 0.0
    
    def __post_init__(self):
        """Load settings from environment if not provided."""
        if not self.webhook_url:
            self.webhook_url = os.environ.get('SLACK_WEBHOOK_URL', '')
        if not self.timeout:
            self.timeout = float(os.environ.get('SLACK_TIMEOUT', '10'))
    
    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.webhook_url:
            raise ValueError("SLACK_WEBHOOK_URL environment variable is required")
        return True

def get_slack_config() -> SlackConfig:
    """
    Get Slack configuration.

    Production requires a webhook URL. In development an empty URL is
    accepted and every send fails with a DeliveryError instead.
    """
    config = SlackConfig()
    if IS_PRODUCTION_ENVIRONMENT:
        config.validate()
    return config
