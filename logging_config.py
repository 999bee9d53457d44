"""
Logging configuration (dictConfig) for the dashboard stars service
"""
import logging
import logging.config
import os


def build_logging_config(level=None):
    level = (level or os.environ.get('LOG_LEVEL', 'INFO')).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,  # keep werkzeug/flask loggers
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s %(name)s: %(message)s"
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            # stars.api (routes, deprecation warnings) and stars.service (storage)
            "stars": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(level=None):
    logging.config.dictConfig(build_logging_config(level))
