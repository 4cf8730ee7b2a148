"""Translate an argument bundle into a composed relation."""

import logging
from collections.abc import Mapping
from functools import cached_property
from typing import Any

from pydantic import ValidationError

from querykit.core.exceptions import InvalidQueryArgumentsError
from querykit.core.filters.operators import get_operator
from querykit.core.inflection import underscore
from querykit.core.logging import log_translation
from querykit.core.query.args import QueryArgs, SortSpec
from querykit.core.relation import Relation

logger = logging.getLogger(__name__)


def parse_args(args: QueryArgs | Mapping[str, Any] | None) -> QueryArgs:
    """Validate a raw argument mapping.

    Raises:
        InvalidQueryArgumentsError: If the bundle has an unexpected shape
    """
    if isinstance(args, QueryArgs):
        return args
    try:
        return QueryArgs.model_validate(dict(args or {}))
    except ValidationError as e:
        details: dict[str, list[str]] = {}
        for error in e.errors():
            field_name = ".".join(str(part) for part in error["loc"]) or "__root__"
            details.setdefault(field_name, []).append(error["msg"])
        raise InvalidQueryArgumentsError(
            "Invalid query arguments", details=details
        ) from e


class QueryTranslator:
    """Applies filters, then search, then sorting to a base relation.

    One instance serves one request; intermediate relations are memoised on
    the instance and nothing is shared between instances.

    Example:
        relation = QueryTranslator(Relation.from_model(Order), args).to_relation()
        rows = session.execute(relation.to_select()).all()
    """

    def __init__(self, relation: Relation, args: QueryArgs | Mapping[str, Any] | None):
        """Initialize translator.

        Args:
            relation: Base relation; never modified
            args: Argument bundle (QueryArgs or a plain mapping)

        Raises:
            InvalidQueryArgumentsError: If the bundle has an unexpected shape
        """
        self.relation = relation
        self.args = parse_args(args)

    @property
    def table_name(self) -> str:
        return self.relation.table_name

    def to_relation(self) -> Relation:
        return self.operated_relation

    def to_select(self) -> Any:
        return self.operated_relation.to_select()

    @cached_property
    def filters(self) -> dict[str, dict[Any, Any]]:
        return self.args.filters()

    @cached_property
    def searches(self) -> dict[str, str]:
        return self.args.searches()

    @cached_property
    def sorters(self) -> list[SortSpec]:
        return self.args.sorters()

    @cached_property
    def filtered_relation(self) -> Relation:
        log_translation(self.table_name, self.filters, self.searches, self.sorters)
        results = self.relation.where()
        results = self.apply_filters(results)
        return self.apply_search(results)

    @cached_property
    def operated_relation(self) -> Relation:
        return self.apply_sorter(self.filtered_relation)

    def qualify(self, field: str) -> str:
        return f"{self.table_name}.{field}"

    def apply_filters(self, results: Relation) -> Relation:
        for field, operators in self.filters.items():
            key = self.qualify(field)
            for operator, value in operators.items():
                results = get_operator(operator).statement(results, key, value)
        return results

    def apply_search(self, results: Relation) -> Relation:
        """AND the filtered relation with an OR of per-field ILIKE matches.

        Search clauses are built on the base relation so they narrow the
        filtered set instead of widening it.
        """
        if not self.searches:
            return results

        search: Relation | None = None
        for field, term in self.searches.items():
            where = self.relation.where(
                self.relation.pattern(self.qualify(field), f"%{term}%")
            )
            search = where if search is None else search.or_(where)

        return results.and_(search)

    def apply_sorter(self, results: Relation) -> Relation:
        order = ", ".join(
            f"{self.parse_sort_field(sort.field)} {sort.order.upper()}"
            for sort in self.sorters
            if not sort.is_empty
        )
        if not order:
            return results

        logger.debug(f"Ordering {self.table_name} by {order}")
        return results.order(order)

    def parse_sort_field(self, raw: str) -> str:
        parsed = underscore(raw)
        if parsed == "random":
            return self.relation.random_order()
        return parsed


def translate(relation: Relation, args: QueryArgs | Mapping[str, Any] | None) -> Relation:
    """Translate an argument bundle against a base relation."""
    return QueryTranslator(relation, args).to_relation()
