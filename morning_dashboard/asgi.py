"""ASGI entrypoint: ``uvicorn morning_dashboard.asgi:app``."""

import logging

from morning_dashboard.core.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

from .application import app, create_app  # noqa: E402

__all__ = ["app", "create_app"]
