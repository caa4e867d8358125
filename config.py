import json
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables from .env
load_dotenv()

LOGGER_NAME = "aggregates"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def get_env_bool(name: str, default: bool) -> bool:
    """Parse a boolean environment variable or raise a clear error."""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise RuntimeError(
        f"Invalid boolean for environment variable {name}: {value!r} "
        f"(expected one of {sorted(_TRUE | _FALSE)})"
    )


def get_env_log_level(name: str, default: str) -> str:
    """Read a logging level name or raise a clear error."""
    value = (os.getenv(name) or "").strip().upper() or default
    if not isinstance(logging.getLevelName(value), int):
        raise RuntimeError(
            f"Invalid log level for environment variable {name}: {value!r} "
            f"(expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL)"
        )
    return value


class Settings(BaseModel):
    # Reject explicit order directives on properties outside the projection
    strict_order: bool = True
    log_level: str = "WARNING"
    log_json: bool = False
    log_file: Optional[str] = None


def load_settings() -> Settings:
    return Settings(
        strict_order=get_env_bool("AGGREGATES_STRICT_ORDER", True),
        log_level=get_env_log_level("AGGREGATES_LOG_LEVEL", "WARNING"),
        log_json=get_env_bool("AGGREGATES_LOG_JSON", False),
        log_file=os.getenv("AGGREGATES_LOG_FILE") or None,
    )


settings = load_settings()


# -----------------------------
# Structured Logging Setup
# -----------------------------
class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "time": self.formatTime(record, self.datefmt),
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
                "exception": self.formatException(record.exc_info) if record.exc_info else None,
            }
        )


def configure_logging(cfg: Optional[Settings] = None) -> logging.Logger:
    """
    Attach handlers to the package logger. Safe to call more than once:
    handlers are only added when the logger has none.
    """
    cfg = cfg or settings

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(cfg.log_level)

    if not logger.handlers:
        formatter: logging.Formatter
        if cfg.log_json:
            formatter = JSONFormatter()
        else:
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if cfg.log_file:
            fh = logging.FileHandler(cfg.log_file)
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger
