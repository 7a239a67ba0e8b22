import logging
import sys
from typing import Optional


def setup_logging(level: Optional[str] = None):
    if level is None:
        # server settings are only loaded when the caller has no level of its own
        from src.config.settings import settings
        level = settings.log_level
    level = level.upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    logger = logging.getLogger("weather_now")
    logger.info(f"Logging initialized with level: {level}")
    return logger
