"""
Centralized logging configuration for the EDGAR plugin parameters.

This module provides standardized logging configuration using structlog
for all components. Catalog loading, reconciliation and plugin selection
all log through loggers obtained here so output stays consistent.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_sync_logger(name: str, plugin_id: Optional[str] = None) -> FilteringBoundLogger:
    """
    Get a logger for the parameter synchronizer.

    Args:
        name: Logger name (typically __name__)
        plugin_id: Plugin whose parameters are being synchronized

    Returns:
        Configured structlog logger bound to the param_sync subsystem
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="param_sync",
        plugin_id=plugin_id,
    )


def log_reconciliation(
    logger: FilteringBoundLogger,
    dimension: str,
    applied: bool,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a reconciliation decision with standardized format.

    Args:
        logger: Structlog logger instance
        dimension: Parameter being reconciled (symbols, formTypes, dates)
        applied: Whether persisted values replaced local state
        reason: Short explanation of the decision
        context: Additional context data
    """
    bound_logger = logger.bind(
        dimension=dimension,
        reconcile_result="APPLIED" if applied else "SKIPPED",
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if applied:
        bound_logger.info("Selection reconciled from persisted keys")
    else:
        bound_logger.debug("Reconciliation skipped")
