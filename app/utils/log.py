"""Logging setup shared by the Streamlit pages."""
from __future__ import annotations

import logging

from app.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Attach a single stream handler to the ``app`` logger.

    Streamlit re-executes the page scripts on every interaction, so the
    function must be safe to call repeatedly.
    """

    logger = logging.getLogger("app")
    logger.setLevel((level or LOG_LEVEL).upper())
    if any(getattr(h, "_dpf_handler", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._dpf_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.propagate = False
