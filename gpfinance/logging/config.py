"""
Centralized logging configuration for the GP engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the engine should use this
configuration to ensure consistent formatting and structured logging.
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


def get_run_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the generational loop subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for run progress
    """
    return get_logger(name).bind(subsystem="gp")


def log_generation_report(
    logger: FilteringBoundLogger,
    generation: int,
    best_fitness: Optional[float],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the periodic best-fitness report.

    Args:
        logger: Structlog logger instance
        generation: Number of generations completed so far
        best_fitness: Fitness of the current best individual
        context: Additional context data
    """
    bound_logger = logger.bind(
        generation=generation,
        best_fitness=best_fitness,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("generation_report")


def log_strategy_fallback(
    logger: FilteringBoundLogger,
    role: str,
    requested: str,
    fallback: str
) -> None:
    """
    Warn that an unrecognized strategy name was replaced by the default.

    Args:
        logger: Structlog logger instance
        role: Strategy role being configured (e.g. "population_selection")
        requested: Name that was asked for
        fallback: Name of the strategy used instead
    """
    logger.warning(
        "strategy_fallback",
        role=role,
        requested=requested,
        fallback=fallback,
    )
