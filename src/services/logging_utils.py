"""Structured logging helpers for the service layer.

All service loggers live under the ``cogs_calculator.services`` namespace so
the CLI can turn them up or down together. Records carry ``operation`` and
``outcome`` attributes plus any context passed as keyword arguments.

Usage:
    from src.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="calculate_kiln_labor_cost",
        outcome="degraded",
        level=logging.DEBUG,
        reason="pieces_per_firing must be greater than 0",
    )
"""

import logging
from typing import Any

LOGGER_PREFIX = "cogs_calculator.services"


def get_service_logger(name: str) -> logging.Logger:
    """
    Return the service logger for a module.

    Only the last component of a dotted module path is kept, so
    ``src.services.costing.pottery`` logs as ``cogs_calculator.services.pottery``.
    """
    return logging.getLogger(f"{LOGGER_PREFIX}.{name.rsplit('.', 1)[-1]}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log ``"<operation>: <outcome>"`` with the context attached to the record.

    Args:
        logger: Service logger
        operation: Function or workflow name (e.g., "save_staff_roles")
        outcome: What happened (e.g., "success", "degraded", "migrated")
        level: Log level; per-calculation records use DEBUG
        **context: Extra record attributes (totals, keys, reasons). Names
            must not clash with standard LogRecord attributes such as
            ``name`` or ``message``.
    """
    logger.log(
        level,
        f"{operation}: {outcome}",
        extra={"operation": operation, "outcome": outcome, **context},
    )
