#!/usr/bin/env python3
"""
Server runner script.

Starts the Inkwell API under uvicorn using HOST, PORT and RELOAD from the
application settings.
"""

import sys

import uvicorn

from inkwell.common.logger import app_logger
from inkwell.config import settings

logger = app_logger.getChild("scripts.run_server")


def main() -> None:
    """Run the API server."""
    try:
        logger.info(f"Starting server on {settings.HOST}:{settings.PORT} (reload: {settings.RELOAD})")
        uvicorn.run(
            "inkwell.main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=settings.RELOAD,
            log_level=settings.LOG_LEVEL.lower()
        )
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
