"""
IdentiKey Logging Configuration

Provides logging configuration using structlog with JSON formatting,
request context injection and OpenTelemetry trace correlation.
"""

import logging
from typing import Any, Dict, Optional

import structlog
from opentelemetry import trace

from identikey.config.settings import LoggingSettings, LogLevel


class IdentiKeyLogger:
    """
    Logger configuration with structured logging.

    Configures structlog with processors for request context injection,
    trace context and JSON (or console) rendering so every component emits
    the same log structure.
    """

    def __init__(self, settings: Optional[LoggingSettings] = None):
        """Initialize the logger configuration."""
        self.settings = settings or LoggingSettings()
        self.configure_structlog()

    def configure_structlog(self) -> None:
        """
        Configure structlog with the processor chain.

        Sets up:
        - Log level filtering
        - Logger name and level addition
        - Timestamp formatting
        - Exception information
        - Request context injection
        - OpenTelemetry trace context
        - JSON or console output
        """
        level = getattr(logging, LogLevel(self.settings.log_level).value)
        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        processors = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            self.add_request_context,
        ]
        if self.settings.include_trace_id:
            processors.append(self.add_trace_context)

        if self.settings.structured_logging:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def add_request_context(logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add request context without overwriting explicit fields.

        Args:
            logger: Logger instance
            method_name: Log method name
            event_dict: Event dictionary to process

        Returns:
            Event dictionary with request context
        """
        from identikey.infrastructure.logging.coordinator import request_context

        ctx = request_context.get()
        if ctx:
            if 'correlation_id' not in event_dict:
                event_dict['correlation_id'] = ctx.correlation_id
            if 'user_name' not in event_dict and ctx.user_name:
                event_dict['user_name'] = ctx.user_name
            if 'operation' not in event_dict and ctx.operation:
                event_dict['operation'] = ctx.operation

        return event_dict

    @staticmethod
    def add_trace_context(logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add OpenTelemetry trace context to log entries.

        Args:
            logger: Logger instance
            method_name: Log method name
            event_dict: Event dictionary to process

        Returns:
            Event dictionary with trace context
        """
        span = trace.get_current_span()
        if span and span.is_recording():
            span_context = span.get_span_context()
            if 'trace_id' not in event_dict:
                event_dict['trace_id'] = format(span_context.trace_id, '032x')
            if 'span_id' not in event_dict:
                event_dict['span_id'] = format(span_context.span_id, '016x')

        return event_dict


# Singleton configuration instance
_logger_config: Optional[IdentiKeyLogger] = None


def configure_logging(settings: Optional[LoggingSettings] = None) -> IdentiKeyLogger:
    """
    (Re)configure logging explicitly, e.g. from a script entry point.

    Args:
        settings: Logging section of the application settings

    Returns:
        The active logger configuration
    """
    global _logger_config
    _logger_config = IdentiKeyLogger(settings)
    return _logger_config


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Configures structlog with defaults on first use if nothing has called
    configure_logging() yet.

    Args:
        name: Logger name, typically module or class name

    Returns:
        Configured structlog BoundLogger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Token issued", uid="42")
    """
    global _logger_config
    if _logger_config is None:
        _logger_config = IdentiKeyLogger()

    return structlog.get_logger(name)
