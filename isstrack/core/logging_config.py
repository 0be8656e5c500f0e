# API logger config
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "custom": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        }
    },
    "handlers": {
        "console": {  # Console handler
            "class": "logging.StreamHandler",
            "formatter": "custom",
            "stream": "ext://sys.stdout",
        },
        "api_file": {  # uvicorn request log
            "class": "logging.FileHandler",
            "formatter": "custom",
            "filename": "logs/api.log",
            "mode": "a",
        },
        "tracker_file": {  # cache refreshes, fallbacks, propagation failures
            "class": "logging.FileHandler",
            "formatter": "custom",
            "filename": "logs/isstrack.log",
            "mode": "a",
        },
    },
    "loggers": {
        "uvicorn": {
            "handlers": ["console", "api_file"],
            "level": "INFO",
            "propagate": False,
        },
        "uvicorn.access": {
            "handlers": ["console", "api_file"],
            "level": "INFO",
            "propagate": False,
        },
        "uvicorn.error": {
            "handlers": ["console", "api_file"],
            "level": "ERROR",
            "propagate": False,
        },
        "isstrack": {
            "handlers": ["console", "tracker_file"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
