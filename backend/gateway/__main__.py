"""
Document Store Gateway — Process Entry Point
==============================================

Usage:
    python -m gateway
    docstore-gateway

Runs uvicorn on settings.host:settings.port. The store connection is made
during lifespan startup, before the socket is bound; if it fails the
process exits with status 1.
"""

import logging
import sys

import uvicorn

from gateway.config import settings
from gateway.main import app, setup_logging

logger = logging.getLogger("gateway")


def main() -> int:
    setup_logging(settings.log_level)
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_config=None,
    )
    server = uvicorn.Server(config)
    server.run()

    if not server.started:
        logger.error("Startup failed; exiting.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
