"""
Debug logger for the descriptor engine.

Supports configurable log levels (NONE, INFO, DEBUG, TRACE) and dual output:
- Console: Human-readable formatted output
- File: JSON Lines format for parsing and analysis
"""

import json
import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv


class LogLevel(Enum):
    """Logging levels for engine debug output."""

    NONE = 0
    INFO = 1
    DEBUG = 2
    TRACE = 3


class EngineLogger:
    """Centralized logger for grid and resolution computations."""

    _instance: Optional["EngineLogger"] = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the logger with configuration from environment."""
        if self._initialized:
            return

        load_dotenv()

        level_str = os.getenv("RESPONSIVE_IMAGES_DEBUG_LEVEL", "NONE").upper()
        try:
            self.level = LogLevel[level_str]
        except KeyError:
            self.level = LogLevel.NONE

        self.log_to_file = os.getenv("RESPONSIVE_IMAGES_LOG_TO_FILE", "false").lower() == "true"
        self.log_dir = Path(os.getenv("RESPONSIVE_IMAGES_LOG_DIR", "logs"))

        self._initialized = True

    @classmethod
    def reset(cls):
        """Drop the shared instance so the next call re-reads the environment."""
        cls._instance = None

    def _should_log(self, min_level: LogLevel) -> bool:
        """Check if we should log at the given level."""
        return self.level.value >= min_level.value

    def _format_timestamp(self) -> str:
        """Get ISO8601 formatted timestamp."""
        return datetime.now().isoformat()

    def _format_widths(self, mapping: Dict[Any, Any]) -> str:
        return ", ".join(f"{key}: {value}" for key, value in mapping.items())

    def _write_to_file(self, log_entry: Dict[str, Any]):
        """Write log entry to JSON Lines file."""
        if not self.log_to_file:
            return

        log_file = self.log_dir / "responsive_images.jsonl"
        log_file.parent.mkdir(parents=True, exist_ok=True)

        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")

    def _emit(self, min_level: LogLevel, event: str, message: str, data: Optional[Dict[str, Any]] = None):
        if not self._should_log(min_level):
            return
        timestamp = self._format_timestamp()
        print(f"[{timestamp}] [{event}] {message}")
        self._write_to_file({
            "timestamp": timestamp,
            "level": min_level.name,
            "event": event,
            "message": message,
            "data": data or {},
        })

    def log_grid(self, cache_key: str, grid: Dict[int, Any], cache_hit: bool):
        """Log a grid lookup (DEBUG)."""
        source = "cache" if cache_hit else "computed"
        widths = {activation: entry.width for activation, entry in grid.items()}
        self._emit(
            LogLevel.DEBUG,
            "grid",
            f"{source} | {cache_key or '<full width>'} | {self._format_widths(widths)}",
            {"cache_key": cache_key, "cache_hit": cache_hit, "widths": widths},
        )

    def log_resolutions(self, name: str, resolutions: Dict[int, Dict[float, int]]):
        """Log the full resolution dictionary (TRACE)."""
        lines = [f"{name}"]
        for activation, factors in resolutions.items():
            lines.append(f"    {activation}px: {self._format_widths(factors)}")
        self._emit(
            LogLevel.TRACE,
            "resolutions",
            "\n".join(lines),
            {"name": name, "resolutions": {str(k): v for k, v in resolutions.items()}},
        )

    def warning(self, message: str, **context):
        """Log a warning (INFO)."""
        self._emit(LogLevel.INFO, "warning", f"Warning: {message}", context)


def get_logger() -> EngineLogger:
    """
    Get the singleton engine logger instance.

    Returns:
        EngineLogger instance
    """
    return EngineLogger()
