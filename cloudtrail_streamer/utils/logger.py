import json
import logging
import os
import time
from typing import Any, Dict, Optional

DEBUG_ENV = "CT_DEBUG_LOGGING"
DEFAULT_LOGGER_NAME = "cloudtrail-streamer"

# mozlog severities, indexed by logging level
SEVERITIES = {
    logging.CRITICAL: 2,
    logging.ERROR: 3,
    logging.WARNING: 4,
    logging.INFO: 6,
    logging.DEBUG: 7,
}


def debug_enabled() -> bool:
    return os.getenv(DEBUG_ENV, "").lower() in ("1", "true", "yes")


class MozlogFormatter(logging.Formatter):
    """
    Formats each record as one mozlog JSON line.

    The message goes under ``Fields.msg``. Anything passed through
    ``extra={"fields": {...}}`` is merged into ``Fields``.
    """

    def format(self, record: logging.LogRecord) -> str:
        fields: Dict[str, Any] = {"msg": record.getMessage()}
        extra_fields = getattr(record, "fields", None)
        if isinstance(extra_fields, dict):
            fields.update(extra_fields)
        if record.exc_info:
            fields["error"] = self.formatException(record.exc_info)

        log_obj = {
            "Timestamp": int(record.created * 1e9),
            "Time": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "Type": "app.log",
            "Logger": record.name,
            "Hostname": os.getenv("AWS_LAMBDA_FUNCTION_NAME", ""),
            "EnvVersion": "2.0",
            "Severity": SEVERITIES.get(record.levelno, 6),
            "Pid": record.process,
            "Fields": fields,
        }
        return json.dumps(log_obj, default=str)


class Logger:
    """
    Singleton logger class for consistent logging across the application.

    Emits mozlog JSON lines on stderr under the ``cloudtrail-streamer`` name.
    The level is INFO unless CT_DEBUG_LOGGING is set, and can be changed later
    with update_level once the configuration has been loaded.
    """

    _instance = None

    def __init__(self, log_level: Optional[str] = None, logger_name: Optional[str] = None):
        """
        Initialize the logger.

        Args:
            log_level (str, optional): The logging level. Defaults to DEBUG when
                CT_DEBUG_LOGGING is set, INFO otherwise.
            logger_name (str, optional): The name of the logger. Defaults to APP_NAME
                or "cloudtrail-streamer".
        """
        self.logger_name = logger_name or os.getenv("APP_NAME", DEFAULT_LOGGER_NAME)
        self.logger = logging.getLogger(self.logger_name)

        self.logger.handlers.clear()

        handler = logging.StreamHandler()
        handler.setFormatter(MozlogFormatter())
        self.logger.addHandler(handler)

        self.set_level(log_level or ("DEBUG" if debug_enabled() else "INFO"))

        self.logger.propagate = False

    def set_level(self, log_level: str) -> None:
        level = getattr(logging, log_level.upper(), logging.INFO)
        self.logger.setLevel(level)
        self.logger.debug(f"Logging level set to {log_level}")

    @classmethod
    def get_logger(cls, log_level: Optional[str] = None) -> logging.Logger:
        """Get the singleton logger instance, creating it if it doesn't exist."""
        if cls._instance is None:
            cls._instance = Logger(log_level=log_level)
        return cls._instance.logger

    @classmethod
    def update_level(cls, log_level: str) -> None:
        if cls._instance is None:
            cls.get_logger(log_level=log_level)
        else:
            cls._instance.set_level(log_level)


logger = Logger.get_logger()
