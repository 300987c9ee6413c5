"""Logging setup shared by the estimator and the CLI."""
import logging
import sys
from typing import Optional
from lipsync.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Send `lipsync` log records to stdout.
    
    Args:
        level: Level name such as "DEBUG"; defaults to settings.log_level
    """
    name = (level or settings.log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level or settings.log_level}")
    
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logger.setLevel(numeric)


logger = logging.getLogger("lipsync")
