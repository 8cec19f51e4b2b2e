import logging, logging.config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO", access_log: bool = True, worker_level: str | None = None):
    """Route app, worker and uvicorn logs through one console handler.

    `worker_level` lets the feed worker be noisier or quieter than the API.
    """
    level = level.upper()
    worker_level = (worker_level or level).upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "access_simple": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "default"},
            "access":  {"class": "logging.StreamHandler", "formatter": "access_simple"},
        },
        "loggers": {
            "newsdesk": {"level": level},
            "newsdesk.services.feed_fetcher": {"level": worker_level},
            "newsdesk.services.feed_ingestion_service": {"level": worker_level},
            "newsdesk.services.feed_scheduler": {"level": worker_level},
            "cron_runner": {"level": worker_level},
            "uvicorn.error":  {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": ("INFO" if access_log else "WARNING"),
                               "handlers": ["access"], "propagate": False},
            # one INFO line per feed request otherwise
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
        "root": {"level": level, "handlers": ["console"]},
    })
