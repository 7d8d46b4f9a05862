# core/logging_config.py
import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the root logger.

    Safe to call more than once; a second call only adjusts the level.
    """
    from core.config import settings

    root = logging.getLogger()
    if not any(getattr(h, "_reading_log", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._reading_log = True
        root.addHandler(handler)
    root.setLevel((level or settings.log_level).upper())
