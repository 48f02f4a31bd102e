import logging
import logging.handlers
import json
import traceback
from pathlib import Path
from typing import Optional

from core.config import settings

class JsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging in production environments.
    Makes logs easier to parse by log aggregation tools like ELK, Graylog, etc.
    """
    def format(self, record):
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }

        # Add extra contextual info if present
        if hasattr(record, "request_id"):
            log_data["request_id"] = record.request_id

        if hasattr(record, "user_id"):
            log_data["user_id"] = record.user_id

        if hasattr(record, "http") and isinstance(record.http, dict):
            log_data["http"] = record.http

        return json.dumps(log_data, default=str)

class ContextAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds contextual information to log records.
    Allows adding request_id and user_id to logs.
    """
    def process(self, msg, kwargs):
        if 'extra' not in kwargs:
            kwargs['extra'] = {}

        if hasattr(self, 'request_id'):
            kwargs['extra']['request_id'] = self.request_id

        if hasattr(self, 'user_id'):
            kwargs['extra']['user_id'] = self.user_id

        return msg, kwargs

def get_logger(name: str, request_id: Optional[str] = None, user_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with contextual information attached.

    Args:
        name: The name of the logger (usually __name__)
        request_id: Optional request ID for request tracking
        user_id: Optional user ID for user tracking

    Returns:
        A logger adapter carrying the contextual information
    """
    logger = logging.getLogger(name)
    adapter = ContextAdapter(logger, {})

    if request_id:
        adapter.request_id = request_id

    if user_id:
        adapter.user_id = user_id

    return adapter

def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    # 10MB max size, keep 5 backups
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=10485760,
        backupCount=5,
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler

def configure_logging() -> logging.Logger:
    """
    Configure logging for the application

    Sets up logging based on environment:
    - In development: Human-readable format with DEBUG level
    - In production: JSON structured logs with INFO level
    - In test: console only, no log files

    Returns:
        A configured root application logger
    """
    log_level = logging.DEBUG if settings.ENVIRONMENT == "development" else logging.INFO

    if settings.ENVIRONMENT == "production":
        logging.basicConfig(level=log_level)
        root_handler = logging.StreamHandler()
        root_handler.setFormatter(JsonFormatter())
        logging.getLogger().handlers = [root_handler]
        formatter = JsonFormatter()

        # Reduce verbosity of external libraries in production
        logging.getLogger("uvicorn").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("passlib").setLevel(logging.WARNING)
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        date_format = "%Y-%m-%d %H:%M:%S"
        logging.basicConfig(
            level=log_level,
            format=log_format,
            datefmt=date_format,
        )
        formatter = logging.Formatter(log_format, date_format)

    app_logger = logging.getLogger("app")
    app_logger.setLevel(log_level)
    app_logger.propagate = False

    security_logger = logging.getLogger("app.security")
    security_logger.setLevel(logging.INFO)
    security_logger.propagate = False

    access_logger = logging.getLogger("app.access")
    access_logger.setLevel(logging.INFO)
    access_logger.propagate = False

    # Avoid stacking handlers when configure_logging runs more than once
    for logger in (app_logger, security_logger, access_logger):
        logger.handlers.clear()

    if settings.ENVIRONMENT == "test":
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        for logger in (app_logger, security_logger, access_logger):
            logger.addHandler(console_handler)
        return app_logger

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(exist_ok=True, parents=True)

    app_logger.addHandler(_rotating_handler(log_dir / "errors.log", logging.ERROR, formatter))
    app_logger.addHandler(_rotating_handler(log_dir / "app.log", log_level, formatter))
    security_logger.addHandler(_rotating_handler(log_dir / "security.log", logging.INFO, formatter))
    access_logger.addHandler(_rotating_handler(log_dir / "access.log", logging.INFO, formatter))

    # Console handler for all app logs in development
    if settings.ENVIRONMENT == "development":
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        app_logger.addHandler(console_handler)

    logging.info(f"Logging configured for {settings.ENVIRONMENT} environment")
    return app_logger
