# invoice_helper/utilities/config_logging.py
LOG_DIR = "logs"
APP_LOG = f"{LOG_DIR}/app.log"
# one line per spreadsheet row looked up in the invoice text
MATCH_LOG = f"{LOG_DIR}/matches.log"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s "
            "[%(process)d:%(threadName)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "match": {
            "format": "%(asctime)s %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "simple",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "verbose",
            "filename": APP_LOG,
            "maxBytes": 5_000_000,
            "backupCount": 5,
            "encoding": "utf-8",
        },
        "matches": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "match",
            "filename": MATCH_LOG,
            "maxBytes": 1_000_000,
            "backupCount": 3,
            "encoding": "utf-8",
        },
    },
    "loggers": {
        # root logger
        "": {
            "level": "DEBUG",
            "handlers": ["console", "file"],
        },
        "invoice_helper.controllers.reconciliation": {
            "level": "DEBUG",
            "handlers": ["matches"],
            "propagate": True,
        },
        # every lookup is already in matches.log via the reconciliation logger
        "invoice_helper.controllers.text_locator": {"level": "INFO", "propagate": True},
        # pdfminer (under pdfplumber) logs every object it decodes
        "pdfminer": {"level": "WARNING", "propagate": True},
    },
}
