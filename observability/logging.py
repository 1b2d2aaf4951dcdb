from __future__ import annotations
import logging
import sys
import json
from typing import Dict, Any, Optional, TextIO
from datetime import datetime, timezone
from pathlib import Path

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName', 'taskName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'message', 'asctime'
}

class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""
    
    def __init__(self, service_name: str = "docsite"):
        super().__init__()
        self.service_name = service_name
    
    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single JSON line."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }
        
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value
        
        return json.dumps(log_entry, default=str)

class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""
    
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'
    
    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors
    
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        message = f"{timestamp} | {record.levelname:8} | {record.name} | {record.getMessage()}"
        
        # Structured context rides along as key=value pairs
        context = {
            key[4:]: value for key, value in record.__dict__.items()
            if key.startswith("ctx_")
        }
        if context:
            message += " | " + " ".join(f"{k}={v}" for k, v in context.items())
        
        if self.use_colors and record.levelname in self.COLORS:
            color = self.COLORS[record.levelname]
            message = f"{color}{message}{self.RESET}"
        
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        
        return message

def setup_logging(
    level: str = "INFO",
    service_name: str = "docsite",
    log_file: Optional[str] = None,
    use_json: bool = False,
    use_colors: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """Setup logging configuration.
    
    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Name of the service for structured logging
        log_file: Optional file path for file logging
        use_json: Whether to use JSON formatting on the console
        use_colors: Whether to use colored output for console
        stream: Console stream, defaults to stderr
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)
    
    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(numeric_level)
    
    if use_json:
        console_formatter: logging.Formatter = JSONFormatter(service_name)
    else:
        console_formatter = ColoredFormatter(use_colors)
    
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)
    
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        
        # Always use JSON for file logging
        file_handler.setFormatter(JSONFormatter(service_name))
        root_logger.addHandler(file_handler)
    
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("MARKDOWN").setLevel(logging.WARNING)

class StructuredLogger:
    """Wrapper for structured logging with additional context."""
    
    def __init__(self, name: str, **default_context):
        self.logger = logging.getLogger(name)
        self.default_context = default_context
    
    def _extra(self, context: Dict[str, Any]) -> Dict[str, Any]:
        full_context = {**self.default_context, **context}
        return {f"ctx_{k}": v for k, v in full_context.items()}
    
    def _log(self, level: int, message: str, **context) -> None:
        self.logger.log(level, message, extra=self._extra(context))
    
    def info(self, message: str, **context) -> None:
        self._log(logging.INFO, message, **context)
    
    def error(self, message: str, **context) -> None:
        self._log(logging.ERROR, message, **context)

def get_structured_logger(name: str, **default_context) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name, **default_context)
