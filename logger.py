import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def sqlalchemy_filter(record):
    """Filter out verbose SQL engine logs."""
    if record["name"].startswith("sqlalchemy"):
        return record["level"].no >= 30  # Only WARNING and above
    return True


# ---------------------------------------------------------------------------
# Format helpers (two-level separators: | for zones, • for related items)
# ---------------------------------------------------------------------------


def _build_context(record) -> str:
    """Build context zone from extra fields set via logger.bind().

    Returns string like: ``Policy=3 • User=17 • Backend=oss``
    or empty string when no context is set.
    """
    extra = record["extra"]
    parts: list[str] = []
    for key, label in [
        ("policy_id", "Policy"),
        ("user_id", "User"),
        ("backend", "Backend"),
    ]:
        val = extra.get(key)
        if val is not None:
            parts.append(f"{label}={val}")
    return " • ".join(parts)


def _console_format(record) -> str:
    """Dynamic format for console (colored) with optional context zone."""
    ctx = _build_context(record)
    ctx_zone = f" | {ctx}" if ctx else ""
    return (
        "<green>{time:YY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[module]: <25}</cyan> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{ctx_zone}"
        " | <level>{message}</level>\n{exception}"
    )


def _file_format(record) -> str:
    """Dynamic format for file (plain text) with optional context zone."""
    ctx = _build_context(record)
    ctx_zone = f" | {ctx}" if ctx else ""
    return (
        "{time:YY-MM-DD HH:mm:ss} | {level: <8} | "
        "{extra[module]: <25} | "
        "{name}:{function}:{line}"
        f"{ctx_zone}"
        " | {message}\n{exception}"
    )


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def setup_logger(log_level: str | None = None, log_file: str | None = None) -> None:
    """Setup logger with two-level separator format and optional rotating file sink."""
    console_level = log_level or os.getenv("LOG_LEVEL", "INFO")

    if log_file is None:
        log_file = os.getenv("LOG_FILE")

    logger.remove()
    logger.configure(
        extra={
            "module": "storage_policy",
            "policy_id": None,
            "user_id": None,
            "backend": None,
        }
    )

    logger.add(
        sys.stderr,
        format=_console_format,
        level=console_level,
        colorize=True,
        filter=sqlalchemy_filter,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=_file_format,
            level="INFO",
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            filter=sqlalchemy_filter,
        )

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_logger(module_name: str | None = None):
    """Get configured logger, optionally bound to a module name."""
    if module_name:
        return logger.bind(module=module_name)
    return logger


setup_logger()
