from __future__ import annotations

import logging

from surfacecrm.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the process (uvicorn keeps its own handlers)."""
    logging.basicConfig(level=(level or settings.log_level), format=LOG_FORMAT)

    # SQL echo is noisy; opt back in with LOG_LEVEL=DEBUG
    if (level or settings.log_level) != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
