"""Structured logging infrastructure for index and query monitoring."""

from .structured_logger import StructuredLogger, get_logger, store_context, operation_context
from .context import operation_scope
from .setup import setup_logging, setup_simple_logging

__all__ = [
    'StructuredLogger',
    'get_logger',
    'store_context',
    'operation_context',
    'operation_scope',
    'setup_logging',
    'setup_simple_logging'
]
