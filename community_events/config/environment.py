"""Deployment environment of the events service.

Import this before anything that reads settings from ``os.environ``: it
pulls a local ``.env`` file into the process environment (variables that
are already set are not overridden) and decides whether the service runs
in production.

``ENVIRONMENT`` selects the mode. Only ``production`` switches production
behaviour on (mandatory ``DATABASE_URL``, no API docs, strict CORS);
anything else, including an unset variable, means development.
"""

import os
import logging
from dotenv import load_dotenv

KNOWN_ENVIRONMENTS = ('development', 'production')

load_dotenv()

def _read_environment() -> str:
    name = os.environ.get('ENVIRONMENT', '').strip().lower()
    if name not in KNOWN_ENVIRONMENTS:
        logging.warning(
            f"ENVIRONMENT={name!r} is not one of {', '.join(KNOWN_ENVIRONMENTS)}; "
            "running as development"
        )
        return 'development'
    return name

ENVIRONMENT = _read_environment()
IS_PRODUCTION_ENVIRONMENT = ENVIRONMENT == 'production'

__all__ = ['ENVIRONMENT', 'IS_PRODUCTION_ENVIRONMENT']
