"""
IdentiKey Logging Infrastructure

Components:
- coordinator: Request-scoped context carried through contextvars
- config: Structlog configuration with JSON formatting and processors
"""

from .config import IdentiKeyLogger, configure_logging, get_logger
from .coordinator import RequestContext, request_context

__all__ = [
    'IdentiKeyLogger',
    'RequestContext',
    'configure_logging',
    'get_logger',
    'request_context',
]
