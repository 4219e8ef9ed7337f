"""Main application entry point."""

from community_events.config.environment import IS_PRODUCTION_ENVIRONMENT
from community_events.config.app import get_app_config
from community_events.api.app import app

if __name__ == "__main__":
    import uvicorn

    config = get_app_config()
    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - import string so hot-reload can re-import the app
        uvicorn.run(
            "community_events.api.app:app",
            host=config.host,
            port=config.port,
            reload=True,
            log_level="debug"
        )
    else:
        uvicorn.run(
            app,
            host=config.host,
            port=config.port,
            log_level="info"
        )
