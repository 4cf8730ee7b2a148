"""Sort input declarations.

A sort input is a pair of required arguments: ``field`` (an enum restricted
to the entity's sortable fields) and ``order`` (the ASC/DESC enum shared by
every sort input in the process).

The shared order enum must be created once at startup::

    order_enum = init_order_enum()
    declarer = SortDeclarer(order_enum)
    declaration = declarer.declare_sort_input("Order", ["createdAt", "total"])
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field, create_model

from querykit.core.exceptions import OrderEnumNotInitializedError
from querykit.core.filters.arguments import ArgumentDeclaration, ArgumentSink

logger = logging.getLogger(__name__)

ORDER_ENUM_NAME = "OrderEnum"


@dataclass(frozen=True)
class EnumValue:
    name: str
    description: str


@dataclass(frozen=True)
class EnumDeclaration:
    """An enumerated type for the schema layer to register."""

    name: str
    values: tuple[EnumValue, ...]

    @property
    def names(self) -> list[str]:
        return [value.name for value in self.values]


@dataclass(frozen=True)
class SortInputDeclaration:
    """Composite sort input: external name, field enum, order enum and arguments."""

    name: str
    field_enum: EnumDeclaration
    order_enum: EnumDeclaration
    arguments: tuple[ArgumentDeclaration, ...]


def create_order_enum() -> EnumDeclaration:
    """Build the ascending/descending order enum."""
    return EnumDeclaration(
        name=ORDER_ENUM_NAME,
        values=(
            EnumValue("ASC", "Ascending order"),
            EnumValue("DESC", "Descending order"),
        ),
    )


_order_enum: EnumDeclaration | None = None


def init_order_enum() -> EnumDeclaration:
    """Create the process-wide order enum once and return it.

    Call during startup, before any request is served. Later calls return the
    existing value.
    """
    global _order_enum
    if _order_enum is None:
        _order_enum = create_order_enum()
        logger.info(f"Initialized shared sort order enum '{_order_enum.name}'")
    return _order_enum


def get_order_enum() -> EnumDeclaration:
    """Return the process-wide order enum.

    Raises:
        OrderEnumNotInitializedError: If init_order_enum() was never called
    """
    if _order_enum is None:
        raise OrderEnumNotInitializedError()
    return _order_enum


class SortDeclarer:
    """Declares sort inputs that share one order enum."""

    def __init__(self, order_enum: EnumDeclaration | None) -> None:
        """Initialize declarer.

        Args:
            order_enum: Shared order enum from init_order_enum()

        Raises:
            OrderEnumNotInitializedError: If order_enum is None
        """
        if order_enum is None:
            raise OrderEnumNotInitializedError()
        self.order_enum = order_enum

    def declare_sort_input(
        self,
        entity_name: str,
        fields: Iterable[str],
        argument: ArgumentSink | None = None,
    ) -> SortInputDeclaration:
        """Declare the sort input for an entity.

        Args:
            entity_name: Entity name, used as prefix of the generated type names
            fields: Sortable field names, one enum value each, in the given order
            argument: Schema-builder callable invoked for ``field`` and ``order``

        Returns:
            SortInputDeclaration named ``<entity_name>SortInput``

        Raises:
            ValueError: If a field name is empty or repeated
        """
        values: list[EnumValue] = []
        seen: set[str] = set()
        for field in fields:
            if not field:
                raise ValueError(f"Empty sortable field for {entity_name}")
            if field in seen:
                raise ValueError(f"Duplicate sortable field '{field}' for {entity_name}")
            seen.add(field)
            values.append(EnumValue(field, f"Sort by {field}"))

        field_enum = EnumDeclaration(
            name=f"{entity_name}SortableField", values=tuple(values)
        )
        arguments = (
            ArgumentDeclaration(
                name="field",
                type=field_enum,
                description="Sortable field",
                required=True,
            ),
            ArgumentDeclaration(
                name="order",
                type=self.order_enum,
                description="Sort order",
                required=True,
            ),
        )

        if argument is not None:
            for declaration in arguments:
                argument(
                    declaration.name,
                    declaration.type,
                    description=declaration.description,
                    required=declaration.required,
                )

        return SortInputDeclaration(
            name=f"{entity_name}SortInput",
            field_enum=field_enum,
            order_enum=self.order_enum,
            arguments=arguments,
        )


def declare_sort_input(
    entity_name: str,
    fields: Iterable[str],
    argument: ArgumentSink | None = None,
) -> SortInputDeclaration:
    """Declare a sort input using the process-wide order enum.

    Raises:
        OrderEnumNotInitializedError: If init_order_enum() was never called
    """
    return SortDeclarer(get_order_enum()).declare_sort_input(
        entity_name, fields, argument
    )


@lru_cache(maxsize=None)
def enum_class(declaration: EnumDeclaration) -> type[Enum]:
    """Python enum for a declaration; equal declarations share one class."""
    return Enum(
        declaration.name,
        [(value.name, value.name) for value in declaration.values],
        type=str,
    )


def build_sort_input_model(declaration: SortInputDeclaration) -> type[BaseModel]:
    """Pydantic model with the required ``field`` and ``order`` arguments."""
    fields: dict[str, Any] = {}
    for argument in declaration.arguments:
        fields[argument.name] = (
            enum_class(argument.type),
            Field(..., description=argument.description),
        )
    return create_model(declaration.name, **fields)
