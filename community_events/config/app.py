"""Application URL and server settings."""

import os
from dataclasses import dataclass

from .environment import IS_PRODUCTION_ENVIRONMENT

API_PREFIX = "/api/v1"

@dataclass
class AppConfig:
    """Application configuration settings."""
    
    # Public base URL of this backend, used to build authentication links
    backend_url: str = ""
    # Frontend origin, always allowed by CORS
    frontend_url: str = ""
    host: str = ""
    port: int = 0
    
    def __post_init__(self):
        """Load settings from environment if not provided."""
        if not self.backend_url:
            self.backend_url = os.environ.get('CORE_BACKEND_URL', 'http://localhost:8000')
        if not self.frontend_url:
            self.frontend_url = os.environ.get('CORE_FRONTEND_URL', '')
        if not self.host:
            self.host = os.environ.get('APP_HOST', '0.0.0.0')
        if not self.port:
            self.port = int(os.environ.get('APP_PORT', '8000'))
    
    @property
    def api_base_url(self) -> str:
        """Base URL of the versioned API, e.g. https://api.example.com/api/v1."""
        return self.backend_url.rstrip('/') + API_PREFIX

def get_app_config() -> AppConfig:
    """Get application configuration."""
    return AppConfig()
