"""
Run the report service: `python -m boon`.

Startup store failures are fatal; the repository is closed once on shutdown.
"""
from __future__ import annotations

import logging
import os
import sys

import uvicorn

from .api import create_app
from .db import listen_port, load_config
from .errors import StoreError
from .repository import open_repository

logger = logging.getLogger("boon")


def main() -> int:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config()
    try:
        port = listen_port()
    except ValueError:
        logger.critical("PORT must be an integer, got %r", os.environ.get("PORT"))
        return 1
    try:
        repo = open_repository(config)
    except StoreError as e:
        logger.critical("%s", e)
        return 1

    try:
        uvicorn.run(create_app(repo), host="0.0.0.0", port=port)
    finally:
        repo.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
