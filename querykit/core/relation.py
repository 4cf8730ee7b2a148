"""Immutable queryable relation built on SQLAlchemy Core."""

import operator
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

from sqlalchemy import Select, Table, and_, literal_column, not_, or_, select, text, true
from sqlalchemy.dialects import registry
from sqlalchemy.engine import Dialect
from sqlalchemy.sql.elements import ColumnElement

from querykit.core.config import get_settings

# Comparison operators accepted by Relation.compare(); values are always bound.
COMPARISONS: dict[str, Callable[[Any, Any], Any]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


@dataclass(frozen=True, eq=False)
class Relation:
    """A not-yet-executed query against a single table.

    Every method returns a new Relation; the receiver is never modified, so a
    base relation can be shared between stages and requests.

    Attributes:
        table: SQLAlchemy table the relation selects from
        criteria: Predicates joined with AND
        ordering: Raw ORDER BY clause, if any
    """

    table: Table
    criteria: tuple[ColumnElement[bool], ...] = field(default=())
    ordering: str | None = None

    @classmethod
    def from_model(cls, model: Any) -> "Relation":
        """Create a relation over a declarative model class or a Table."""
        table = getattr(model, "__table__", model)
        if not isinstance(table, Table):
            raise TypeError(f"Cannot build a relation from {model!r}")
        return cls(table=table)

    @property
    def table_name(self) -> str:
        return self.table.name

    # ===== Predicate builders =====

    def column(self, key: str) -> ColumnElement[Any]:
        """Reference a column by a (possibly table-qualified) key.

        The key is rendered verbatim, so it must come from developer-controlled
        field lists, never from client values.
        """
        return literal_column(key)

    def match(self, key: str, value: Any) -> ColumnElement[bool]:
        """Equality predicate; list and tuple values become membership."""
        column = self.column(key)
        if isinstance(value, (list, tuple, set, frozenset)):
            return column.in_(list(value))
        return column == value

    def compare(self, key: str, comparison: str, value: Any) -> ColumnElement[bool]:
        """Comparison predicate with the value sent as a bound parameter."""
        try:
            compare = COMPARISONS[comparison]
        except KeyError:
            raise ValueError(f"Unsupported comparison '{comparison}'") from None
        return compare(self.column(key), value)

    def pattern(self, key: str, pattern: str) -> ColumnElement[bool]:
        """Case-insensitive LIKE predicate with the pattern as a bound parameter."""
        return self.column(key).ilike(pattern)

    @staticmethod
    def random_order() -> str:
        """Function call token that orders rows randomly."""
        return get_settings().RANDOM_ORDER_FUNCTION

    # ===== Composition =====

    def where(self, *predicates: ColumnElement[bool]) -> "Relation":
        """Conjoin predicates. Without arguments returns an unchanged copy."""
        return replace(self, criteria=self.criteria + tuple(predicates))

    def where_not(self, predicate: ColumnElement[bool]) -> "Relation":
        return replace(self, criteria=self.criteria + (not_(predicate),))

    def or_(self, other: "Relation") -> "Relation":
        """Relation matching rows of either relation."""
        self._check_same_table(other)
        return replace(
            self, criteria=(or_(self.conjunction(), other.conjunction()),)
        )

    def and_(self, other: "Relation") -> "Relation":
        """Relation matching rows of both relations."""
        self._check_same_table(other)
        return replace(self, criteria=self.criteria + other.criteria)

    def order(self, clause: str) -> "Relation":
        """Relation ordered by `clause` after any existing ordering."""
        if self.ordering:
            clause = f"{self.ordering}, {clause}"
        return replace(self, ordering=clause)

    def conjunction(self) -> ColumnElement[bool]:
        """All criteria as a single boolean expression."""
        if not self.criteria:
            return true()
        if len(self.criteria) == 1:
            return self.criteria[0]
        return and_(*self.criteria)

    def _check_same_table(self, other: "Relation") -> None:
        if other.table is not self.table:
            raise ValueError(
                f"Cannot combine relations over '{self.table_name}' and '{other.table_name}'"
            )

    # ===== Rendering =====

    def to_select(self) -> Select:
        """Build the SQLAlchemy statement; nothing is executed."""
        statement = select(self.table)
        if self.criteria:
            statement = statement.where(*self.criteria)
        if self.ordering:
            statement = statement.order_by(text(self.ordering))
        return statement

    def compile(self, dialect: Dialect | None = None) -> Any:
        """Compile the statement for inspection.

        Args:
            dialect: SQLAlchemy dialect (defaults to Settings.SQL_DIALECT)

        Returns:
            Compiled statement; ``str()`` gives the SQL, ``.params`` the bound values
        """
        if dialect is None:
            dialect = registry.load(get_settings().SQL_DIALECT)()
        return self.to_select().compile(dialect=dialect)

    def __repr__(self) -> str:
        return (
            f"Relation(table={self.table_name!r}, criteria={len(self.criteria)}, "
            f"ordering={self.ordering!r})"
        )
