"""
Process entry point: ``python -m ledgerline``.

uvicorn owns the listening socket and the SIGINT/SIGTERM handling. On a
signal it stops accepting connections and gives in-flight requests
``shutdown_grace_seconds`` to finish (logging and cancelling whatever is
left), then runs the application lifespan shutdown, which closes the
primary database and each replica in order.
"""

import logging

import uvicorn

from ledgerline.config import settings
from ledgerline.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging(settings.log_level)

    config = uvicorn.Config(
        "ledgerline.main:app",
        host=settings.api_host,
        port=settings.api_port,
        timeout_keep_alive=settings.read_timeout,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)

    logger.info("listening on %s:%d", settings.api_host, settings.api_port)
    server.run()
    logger.info("server stopped")


if __name__ == "__main__":
    main()
