#!/usr/bin/env python3
"""Send a test message to the configured Slack moderation channel."""

import sys
import logging
from pathlib import Path

# Add project root to Python path when running directly
sys.path.append(str(Path(__file__).parent.parent.parent))

from community_events.config.external_services.slack import get_slack_config
from community_events.notifications import DeliveryError, SlackWebhookGateway

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Test notification from the community events service."

def send_test_notification(message: str) -> bool:
    config = get_slack_config()
    try:
        config.validate()
    except ValueError as e:
        logger.error(f"Slack is not configured: {e}")
        return False

    gateway = SlackWebhookGateway.from_config(config)
    try:
        gateway.send(message)
    except DeliveryError as e:
        logger.error(f"Delivery failed: {e}")
        return False
    logger.info("Message delivered")
    return True

if __name__ == "__main__":
    message = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_MESSAGE
    sys.exit(0 if send_test_notification(message) else 1)
