"""Registry of the filter operators exposed to clients.

Each operator maps a (relation, qualified key, value) triple to a new relation
and describes how a field's base type becomes the argument type:

    eq/neq/gt/gte/lt/lte  ->  base type
    in/nin                ->  list of base type
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from querykit.core.exceptions import UnknownOperatorError
from querykit.core.relation import Relation

# Top-level argument names owned by the translator; schema fields must not use them.
RESERVED_FIELDS = ("limit", "offset", "sort_by", "filter_by", "search_by")


class FilterOperator(str, Enum):
    """Supported filter operators."""

    EQ = "eq"
    NEQ = "neq"
    IN = "in"
    NIN = "nin"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"

    def __str__(self) -> str:
        return self.value


Statement = Callable[[Relation, str, Any], Relation]


@dataclass(frozen=True)
class OperatorDefinition:
    """How one operator filters a relation and types its argument."""

    name: FilterOperator
    statement: Statement
    description: str
    transform_type: Callable[[Any], Any]


def _same_type(base_type: Any) -> Any:
    return base_type


def _list_of(base_type: Any) -> Any:
    return list[base_type]


FILTERS: MappingProxyType[FilterOperator, OperatorDefinition] = MappingProxyType(
    {
        definition.name: definition
        for definition in (
            OperatorDefinition(
                name=FilterOperator.EQ,
                statement=lambda results, key, value: results.where(
                    results.match(key, value)
                ),
                description="Equal",
                transform_type=_same_type,
            ),
            OperatorDefinition(
                name=FilterOperator.NEQ,
                statement=lambda results, key, value: results.where_not(
                    results.match(key, value)
                ),
                description="Not equal",
                transform_type=_same_type,
            ),
            OperatorDefinition(
                name=FilterOperator.IN,
                statement=lambda results, key, value: results.where(
                    results.match(key, value)
                ),
                description="In",
                transform_type=_list_of,
            ),
            OperatorDefinition(
                name=FilterOperator.NIN,
                statement=lambda results, key, value: results.where_not(
                    results.match(key, value)
                ),
                description="Not in",
                transform_type=_list_of,
            ),
            OperatorDefinition(
                name=FilterOperator.GT,
                statement=lambda results, key, value: results.where(
                    results.compare(key, ">", value)
                ),
                description="Greater than",
                transform_type=_same_type,
            ),
            OperatorDefinition(
                name=FilterOperator.GTE,
                statement=lambda results, key, value: results.where(
                    results.compare(key, ">=", value)
                ),
                description="Greater than or equal to",
                transform_type=_same_type,
            ),
            OperatorDefinition(
                name=FilterOperator.LT,
                statement=lambda results, key, value: results.where(
                    results.compare(key, "<", value)
                ),
                description="Lower than",
                transform_type=_same_type,
            ),
            OperatorDefinition(
                name=FilterOperator.LTE,
                statement=lambda results, key, value: results.where(
                    results.compare(key, "<=", value)
                ),
                description="Lower than or equal to",
                transform_type=_same_type,
            ),
        )
    }
)


def lookup(name: Any) -> OperatorDefinition | None:
    """Find an operator definition by name.

    Args:
        name: Operator name or FilterOperator member

    Returns:
        The definition, or None when the name is not registered
    """
    try:
        return FILTERS.get(FilterOperator(name))
    except ValueError:
        return None


def get_operator(name: Any) -> OperatorDefinition:
    """Like lookup() but raises UnknownOperatorError for unregistered names."""
    definition = lookup(name)
    if definition is None:
        raise UnknownOperatorError(name)
    return definition
