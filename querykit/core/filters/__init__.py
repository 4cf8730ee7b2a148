"""Filter operators and filter argument declarations."""

from querykit.core.filters.arguments import (
    ArgumentDeclaration,
    FieldCollector,
    build_filter_input_model,
    declare_filter_arguments,
)
from querykit.core.filters.operators import (
    FILTERS,
    RESERVED_FIELDS,
    FilterOperator,
    OperatorDefinition,
    get_operator,
    lookup,
)

__all__ = [
    "FILTERS",
    "RESERVED_FIELDS",
    "ArgumentDeclaration",
    "FieldCollector",
    "FilterOperator",
    "OperatorDefinition",
    "build_filter_input_model",
    "declare_filter_arguments",
    "get_operator",
    "lookup",
]
