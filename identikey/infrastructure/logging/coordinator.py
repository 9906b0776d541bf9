"""
IdentiKey Logging Context

Provides the request-scoped context that the structlog processors inject
into every log entry emitted while a caller's operation is in flight.
"""

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RequestContext:
    """
    Request-scoped data for log correlation.

    Attributes:
        correlation_id: Unique identifier for request tracing
        user_name: Optional name of the user the request acts for
        operation: Optional name of the public store operation
    """
    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    user_name: Optional[str] = None
    operation: Optional[str] = None

    def __post_init__(self):
        self._token = None

    def __enter__(self):
        """Enter the context manager - set this context as active."""
        self._token = request_context.set(self)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit the context manager - restore the previous context."""
        if self._token is not None:
            request_context.reset(self._token)
            self._token = None
        return False


request_context: ContextVar[Optional[RequestContext]] = ContextVar("request_context", default=None)
