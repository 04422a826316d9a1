"""
Logger Module for WAVECHECK.

Capture event journal. Every capture keeps an in-memory list of events
(gate hold reached, window opened/closed, finalize, abandon, score) that
can be written next to the exported session for later inspection.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from enum import Enum
import json
import logging
import time
from pathlib import Path

_log = logging.getLogger(__name__)


class LogLevel(Enum):
    """Log levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogCategory(Enum):
    """Log categories."""
    GATE = "gate"
    CAPTURE = "capture"
    WINDOW = "window"
    SCORE = "score"
    SYSTEM = "system"


_STD_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


@dataclass
class LogEntry:
    """Log entry."""
    timestamp: float
    level: LogLevel
    category: LogCategory
    message: str
    data: Optional[Dict] = None

    def to_dict(self) -> Dict:
        return {
            'timestamp': self.timestamp,
            'level': self.level.value,
            'category': self.category.value,
            'message': self.message,
            'data': self.data,
        }


@dataclass
class SessionLogger:
    """
    Event journal for one capture.
    """

    session_id: str
    log_dir: str = "./data/logs"
    entries: List[LogEntry] = field(default_factory=list)

    def log(self, level: LogLevel, category: LogCategory, message: str, data: Optional[Dict] = None):
        """
        Log a message.

        The entry is kept in the journal and forwarded to the module logger.

        Args:
            level: Log level
            category: Log category
            message: Log message
            data: Optional data
        """
        entry = LogEntry(
            timestamp=time.time(),
            level=level,
            category=category,
            message=message,
            data=data
        )
        self.entries.append(entry)
        _log.log(_STD_LEVELS[level], "[%s][%s] %s", self.session_id, category.value, message)

    def debug(self, category: LogCategory, message: str, data: Optional[Dict] = None):
        self.log(LogLevel.DEBUG, category, message, data)

    def info(self, category: LogCategory, message: str, data: Optional[Dict] = None):
        """Log info message."""
        self.log(LogLevel.INFO, category, message, data)

    def warning(self, category: LogCategory, message: str, data: Optional[Dict] = None):
        """Log warning message."""
        self.log(LogLevel.WARNING, category, message, data)

    def error(self, category: LogCategory, message: str, data: Optional[Dict] = None):
        """Log error message."""
        self.log(LogLevel.ERROR, category, message, data)

    def by_category(self, category: LogCategory) -> List[LogEntry]:
        return [e for e in self.entries if e.category == category]

    def save_session_log(self) -> Path:
        """
        Save the journal to `<log_dir>/capture_<session_id>_<epoch>.json`.

        Returns:
            Path of the written file
        """
        log_dir = Path(self.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        safe_id = "".join(c if c.isalnum() or c in "-_" else "_" for c in self.session_id)
        log_file = log_dir / f"capture_{safe_id}_{int(time.time())}.json"

        log_data = {
            'session_id': self.session_id,
            'timestamp': time.time(),
            'entries': [entry.to_dict() for entry in self.entries],
        }

        with open(log_file, 'w', encoding='utf-8') as f:
            json.dump(log_data, f, indent=2, ensure_ascii=False)
        return log_file


def create_session_logger(session_id: str, log_dir: str = "./data/logs") -> SessionLogger:
    """
    Create a session logger.

    Args:
        session_id: Session ID
        log_dir: Log directory

    Returns:
        SessionLogger instance
    """
    return SessionLogger(session_id, log_dir)
