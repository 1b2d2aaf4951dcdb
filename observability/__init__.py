"""Observability package for docsite."""

from .logging import (
    setup_logging,
    get_structured_logger,
    StructuredLogger,
    JSONFormatter,
    ColoredFormatter
)

__all__ = [
    'setup_logging',
    'get_structured_logger',
    'StructuredLogger',
    'JSONFormatter',
    'ColoredFormatter'
]
