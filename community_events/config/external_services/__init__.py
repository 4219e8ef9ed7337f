"""External service configurations."""

from .slack import (
    SlackConfig,
    get_slack_config
)

__all__ = [
    'SlackConfig',
    'get_slack_config'
]
