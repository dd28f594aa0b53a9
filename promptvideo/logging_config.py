import logging
import logging.config
from typing import Dict

from promptvideo.config import settings


def build_logging_config(level: str) -> Dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            }
        },
        "loggers": {
            # requests/openai log every connection at DEBUG
            "urllib3": {"level": "WARNING"},
            "httpx": {"level": "WARNING"},
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def configure_logging() -> None:
    logging.config.dictConfig(build_logging_config(settings.log_level))
