"""Typed argument bundle accepted by the query translator."""

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from querykit.core.filters.operators import FilterOperator

# Field names are interpolated into SQL; only plain identifiers are accepted.
FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

SORT_ORDERS = ("ASC", "DESC")


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_unset=True)
    return value


def _check_field_names(names: Any) -> None:
    for name in names:
        if not FIELD_NAME.match(name):
            raise ValueError(f"Invalid field name '{name}'")


class SortSpec(BaseModel):
    """One ordering key. Empty field or order means no ordering for this entry."""

    field: str = ""
    order: str = ""

    @field_validator("field", "order", mode="before")
    @classmethod
    def coerce_enum(cls, value: Any) -> Any:
        if value is None:
            return ""
        return _plain(value)

    @field_validator("field")
    @classmethod
    def validate_field(cls, value: str) -> str:
        if value:
            _check_field_names([value])
        return value

    @field_validator("order")
    @classmethod
    def validate_order(cls, value: str) -> str:
        if value and value.upper() not in SORT_ORDERS:
            raise ValueError(f"Sort order must be one of {', '.join(SORT_ORDERS)}")
        return value

    @property
    def is_empty(self) -> bool:
        return not self.field or not self.order


class QueryArgs(BaseModel):
    """Arguments recognised by the translator; all of them are optional.

    Example:
        QueryArgs.model_validate({
            "filter_by": {"status": {"in": ["open", "pending"]}},
            "search_by": {"customer_name": "ann"},
            "sort_by": {"field": "createdAt", "order": "DESC"},
        })
    """

    model_config = ConfigDict(extra="ignore")

    filter_by: dict[str, dict[FilterOperator, Any] | None] | None = None
    sort_by: SortSpec | list[SortSpec | None] | None = None
    search_by: dict[str, str | None] | None = None
    # Reserved; pagination is applied by the caller
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)

    @field_validator("filter_by", mode="before")
    @classmethod
    def dump_filter_models(cls, value: Any) -> Any:
        value = _plain(value)
        if isinstance(value, dict):
            return {field: _plain(filters) for field, filters in value.items()}
        return value

    @field_validator("sort_by", mode="before")
    @classmethod
    def dump_sort_models(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_plain(spec) for spec in value]
        return _plain(value)

    @field_validator("search_by", mode="before")
    @classmethod
    def dump_search_model(cls, value: Any) -> Any:
        value = _plain(value)
        if isinstance(value, dict):
            # Numeric terms are matched as text
            return {
                field: str(term)
                if isinstance(term, (int, float)) and not isinstance(term, bool)
                else term
                for field, term in value.items()
            }
        return value

    @field_validator("filter_by", "search_by")
    @classmethod
    def validate_field_names(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        if value:
            _check_field_names(value)
        return value

    def filters(self) -> dict[str, dict[FilterOperator, Any]]:
        """Filters with empty field entries removed."""
        return {
            field: operators
            for field, operators in (self.filter_by or {}).items()
            if operators
        }

    def searches(self) -> dict[str, str]:
        """Search terms with None values removed."""
        return {
            field: term
            for field, term in (self.search_by or {}).items()
            if term is not None
        }

    def sorters(self) -> list[SortSpec]:
        """Sort specs as a list, without None entries."""
        if self.sort_by is None:
            return []
        if isinstance(self.sort_by, SortSpec):
            return [self.sort_by]
        return [spec for spec in self.sort_by if spec is not None]
