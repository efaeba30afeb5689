"""
Launch the due diligence API with uvicorn.

Usage:

    python -m duediligence

Host, port and log level come from the environment (see config.py).
"""

from __future__ import annotations

import logging

import uvicorn

from .config import get_settings


logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(message)s")
    logger.info("Servidor corriendo en http://localhost:%s", settings.port)
    uvicorn.run(
        "duediligence.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
