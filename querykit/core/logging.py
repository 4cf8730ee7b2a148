"""Logging configuration for query translation events."""

import logging
import sys
from collections.abc import Iterable
from typing import Any

from querykit.core.config import get_settings

settings = get_settings()

# Create logger for library events
querykit_logger = logging.getLogger("querykit")
querykit_logger.setLevel(settings.LOG_LEVEL.upper())

# Create console handler with structured format
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.DEBUG)

# Create formatter
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
console_handler.setFormatter(formatter)

# Add handler to logger if not already added
if not querykit_logger.handlers:
    querykit_logger.addHandler(console_handler)


def log_invalid_operator(operator: Any, available: Iterable[str]) -> None:
    """
    Log a rejected filter operator at declaration time.

    Args:
        operator: Operator name that was requested.
        available: Names of the registered operators.
    """
    querykit_logger.warning(
        f"Invalid filter operator - operator={operator}, available={', '.join(available)}"
    )


def log_translation(
    table_name: str,
    filters: dict[str, Any] | None,
    searches: dict[str, Any] | None,
    sorters: list[Any],
) -> None:
    """
    Log the shape of a translated argument bundle.

    Values are never logged, only field names and operators.

    Args:
        table_name: Table the relation is qualified with.
        filters: Filter mapping (field -> operator -> value).
        searches: Search mapping (field -> term).
        sorters: Normalised sort specs.
    """
    if not querykit_logger.isEnabledFor(logging.DEBUG):
        return

    filter_keys = [
        f"{field}[{','.join(str(op) for op in (ops or {}))}]"
        for field, ops in (filters or {}).items()
    ]
    message = f"Translating query - table={table_name}"
    if filter_keys:
        message += f", filters={' '.join(filter_keys)}"
    if searches:
        message += f", search={','.join(searches)}"
    if sorters:
        message += f", sort={len(sorters)}"

    querykit_logger.debug(message)
