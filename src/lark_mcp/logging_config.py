"""
Logging configuration for the Lark MCP server.

Writes structured JSON-lines logs and a human-readable log under the log
directory, and mirrors human-readable output to stderr. stdout is left
untouched because the stdio transport owns it.
"""

import json
import logging
import logging.handlers
import shutil
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

EXTRA_FIELDS = ("method", "path", "code", "duration_ms")


class StructuredFormatter(logging.Formatter):
    """JSON formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False)


class HumanReadableFormatter(logging.Formatter):
    """Single-line formatter, colourised when stderr is a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if sys.stderr.isatty():
            level = f"{self.COLORS.get(level, '')}{level}{self.RESET}"

        when = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        line = (
            f"{when}.{int(record.msecs):03d} [{level}] {record.name}:{record.lineno} "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def archive_existing_logs(log_dir: Path) -> dict[str, Any]:
    """
    Move log files left by a previous run into ``archives/<timestamp>/``.

    Returns:
        Dictionary with 'archived', 'archive_dir' and 'file_count'
    """
    result: dict[str, Any] = {"archived": False, "archive_dir": None, "file_count": 0}

    if not log_dir.exists():
        return result

    log_files = [p for pattern in ("*.log*", "*.jsonl*") for p in log_dir.glob(pattern)]
    if not log_files:
        return result

    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    archive_dir = log_dir / "archives" / stamp
    archive_dir.mkdir(parents=True, exist_ok=True)

    moved = 0
    for log_file in log_files:
        try:
            shutil.move(str(log_file), str(archive_dir / log_file.name))
            moved += 1
        except OSError as e:
            # logging is not configured yet
            print(f"Warning: Failed to archive {log_file.name}: {e}", file=sys.stderr)

    result["archived"] = moved > 0
    result["archive_dir"] = str(archive_dir.relative_to(log_dir)) if moved else None
    result["file_count"] = moved
    return result


def _rotating_handler(
    path: Path, level: int, formatter: logging.Formatter, max_bytes: int, backup_count: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_dir: str = "logs",
    log_level: str = "INFO",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 10,
) -> None:
    """
    Configure root logging for the server process.

    Args:
        log_dir: Directory to store log files
        log_level: Minimum level for the readable log and console
        max_bytes: Maximum size of each log file before rotation
        backup_count: Number of rotated files to keep
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    archive_info = archive_existing_logs(log_path)

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    all_file = log_path / "lark_mcp_all.jsonl"
    error_file = log_path / "lark_mcp_errors.jsonl"
    readable_file = log_path / "lark_mcp.log"

    root.addHandler(
        _rotating_handler(all_file, logging.DEBUG, StructuredFormatter(), max_bytes, backup_count)
    )
    root.addHandler(
        _rotating_handler(error_file, logging.ERROR, StructuredFormatter(), max_bytes, backup_count)
    )
    root.addHandler(
        _rotating_handler(
            readable_file, numeric_level, HumanReadableFormatter(), max_bytes, backup_count
        )
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(HumanReadableFormatter())
    root.addHandler(console)

    # Noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger("lark_mcp.logging")
    if archive_info["archived"]:
        logger.info(
            f"Previous logs archived: {archive_info['file_count']} file(s) -> "
            f"{archive_info['archive_dir']}"
        )
    logger.info(f"Logging to {log_path.absolute()} at {log_level.upper()}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
