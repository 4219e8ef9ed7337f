"""CORS configuration for the FastAPI application."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT
from .app import get_app_config

def _configured_origins() -> list:
    """Origins from ALLOW_ORIGINS (comma separated) plus the frontend URL."""
    origins = [
        origin.strip()
        for origin in os.environ.get('ALLOW_ORIGINS', '').split(',')
        if origin.strip()
    ]
    frontend_url = get_app_config().frontend_url
    if frontend_url and frontend_url not in origins:
        origins.append(frontend_url)
    return origins

# CORS Origins configuration
ALLOWED_ORIGINS = {
    False: ["*"],                   # Development - allow all
    True: _configured_origins(),    # Production - restricted
}

# CORS Methods configuration
ALLOWED_METHODS = [
    "GET",      # For listing, fetching and authenticating events
    "POST",     # For event submissions and contact messages
    "OPTIONS"   # Required for CORS preflight
]

# CORS Headers configuration
ALLOWED_HEADERS = [
    "Content-Type",   # For request bodies
    "Accept",         # For content negotiation
]

# Additional CORS settings
CORS_CONFIG = {
    "allow_origins": ALLOWED_ORIGINS[IS_PRODUCTION_ENVIRONMENT],
    "allow_credentials": True,
    "allow_methods": ALLOWED_METHODS,
    "allow_headers": ALLOWED_HEADERS,
    "expose_headers": [],
    "max_age": 3600,
}
