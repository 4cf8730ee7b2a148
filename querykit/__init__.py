"""
querykit: translate client query arguments into composed SQLAlchemy relations.
"""

from querykit.core.exceptions import (
    InvalidOperatorError,
    InvalidQueryArgumentsError,
    OrderEnumNotInitializedError,
    QueryKitError,
    UnknownOperatorError,
)
from querykit.core.filters import (
    FILTERS,
    RESERVED_FIELDS,
    ArgumentDeclaration,
    FilterOperator,
    build_filter_input_model,
    declare_filter_arguments,
)
from querykit.core.query import QueryArgs, QueryTranslator, SortSpec, translate
from querykit.core.relation import Relation
from querykit.core.sorting import (
    SortDeclarer,
    build_sort_input_model,
    declare_sort_input,
    init_order_enum,
)

__version__ = "0.1.0"

__all__ = [
    "FILTERS",
    "RESERVED_FIELDS",
    "ArgumentDeclaration",
    "FilterOperator",
    "InvalidOperatorError",
    "InvalidQueryArgumentsError",
    "OrderEnumNotInitializedError",
    "QueryArgs",
    "QueryKitError",
    "QueryTranslator",
    "Relation",
    "SortDeclarer",
    "SortSpec",
    "UnknownOperatorError",
    "build_filter_input_model",
    "build_sort_input_model",
    "declare_filter_arguments",
    "declare_sort_input",
    "init_order_enum",
    "translate",
]
