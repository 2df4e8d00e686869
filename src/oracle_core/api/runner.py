"""Serve the oracle API with uvicorn."""

from __future__ import annotations

import argparse

import structlog
import uvicorn

from oracle_core.api.app import app, config
from oracle_core.logging.setup import setup_logging

logger = structlog.get_logger()


def main(argv: list[str] | None = None) -> None:
    """Run the API server; ``--host``/``--port`` override the ``api`` config section."""
    parser = argparse.ArgumentParser(description="Oracle API server")
    parser.add_argument("--host", default=config.api.host)
    parser.add_argument("--port", type=int, default=config.api.port)
    args = parser.parse_args(argv)

    setup_logging(level=config.logging.level, log_format=config.logging.format)
    logger.info("api_starting", host=args.host, port=args.port, db=config.database.url.split("://")[0])

    try:
        # log_config=None leaves uvicorn's loggers on our structlog handler
        uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    except Exception as e:
        logger.error("api_start_failed", error=str(e))
        raise


if __name__ == "__main__":
    main()
