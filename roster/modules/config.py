import logging
import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s [%(levelname)s] %(name)s :: %(message)s")
APP_TITLE = os.getenv("APP_TITLE", "Roster")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

logger = logging.getLogger("roster.config")


def configure_logging():
    """
    Configure root logging from LOG_LEVEL / LOG_FORMAT.
    Unknown levels fall back to INFO.
    """
    level = getattr(logging, LOG_LEVEL, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.debug(f"Logging configured | level={logging.getLevelName(level)}")
