import sys
import logging
import logging.config
from environs import Env

env = Env()

ENTRIES_LOGGER_NAME = "sample_client.correlated"


def get_logging_config(level="INFO"):
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                # Cloud Logging reads the level from "severity"
                "rename_fields": {"levelname": "severity"},
            },
            # Correlated entries are already serialized, print them as they are
            "plain": {
                "format": "%(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "json",
            },
            "entries": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "plain",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": level,
            },
            ENTRIES_LOGGER_NAME: {
                "handlers": ["entries"],
                "level": level,
                "propagate": False,
            },
            # Reduce noise from the HTTP stack and the GCP clients in debug mode
            "urllib3": {
                "level": "WARNING",
            },
            "google.auth": {
                "level": "WARNING",
            },
        },
    }


is_initialized = False


def init(level=None):
    global is_initialized

    if is_initialized:
        return

    level = level or env.log_level("LOGGING_LEVEL", logging.INFO)
    logging.config.dictConfig(get_logging_config(logging.getLevelName(level)))

    is_initialized = True


def set_level(level):
    logging.getLogger().setLevel(level)
    logging.getLogger(ENTRIES_LOGGER_NAME).setLevel(level)
