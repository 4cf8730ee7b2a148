"""Declare typed filter arguments on a schema builder."""

import keyword
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, create_model

from querykit.core.exceptions import InvalidOperatorError
from querykit.core.filters.operators import FILTERS, OperatorDefinition, lookup
from querykit.core.logging import log_invalid_operator

logger = logging.getLogger(__name__)


class ArgumentSink(Protocol):
    """Schema-builder capability that registers one argument."""

    def __call__(
        self, name: str, type_: Any, *, description: str, required: bool
    ) -> Any: ...


@dataclass(frozen=True)
class ArgumentDeclaration:
    """A typed argument emitted for the schema layer."""

    name: str
    type: Any
    description: str
    required: bool = False


def declare_filter_arguments(
    argument: ArgumentSink | None,
    base_type: Any,
    operator_names: Iterable[Any],
) -> list[ArgumentDeclaration]:
    """Declare one optional argument per requested operator.

    Every name is validated before anything is declared, so an invalid
    operator never leaves a partially declared input behind.

    Args:
        argument: Schema-builder callable invoked once per declaration (optional)
        base_type: Type of the filtered field
        operator_names: Operator names, declared in the given order

    Returns:
        Declarations in the order of ``operator_names``

    Raises:
        InvalidOperatorError: If any name is not a registered operator
    """
    definitions: list[OperatorDefinition] = []
    for name in operator_names:
        definition = lookup(name)
        if definition is None:
            available = [str(op) for op in FILTERS]
            log_invalid_operator(name, available)
            raise InvalidOperatorError(name, available)
        definitions.append(definition)

    declarations = [
        ArgumentDeclaration(
            name=definition.name.value,
            type=definition.transform_type(base_type),
            description=definition.description,
            required=False,
        )
        for definition in definitions
    ]

    if argument is not None:
        for declaration in declarations:
            argument(
                declaration.name,
                declaration.type,
                description=declaration.description,
                required=declaration.required,
            )

    logger.debug(
        f"Declared filter arguments for {base_type!r}: "
        f"{', '.join(d.name for d in declarations)}"
    )
    return declarations


class FieldCollector:
    """Argument sink that builds a pydantic input model.

    Example:
        collector = FieldCollector()
        declare_filter_arguments(collector, int, ["eq", "in"])
        IdFilter = collector.build("IdFilter")
        IdFilter.model_validate({"in": [1, 2]})
    """

    def __init__(self) -> None:
        self.fields: dict[str, tuple[Any, Any]] = {}

    def __call__(
        self, name: str, type_: Any, *, description: str, required: bool
    ) -> None:
        # Python keywords ("in") get a trailing underscore and keep the name as alias
        attribute = f"{name}_" if keyword.iskeyword(name) else name
        if required:
            info = Field(..., alias=name, description=description)
            self.fields[attribute] = (type_, info)
        else:
            info = Field(default=None, alias=name, description=description)
            self.fields[attribute] = (Optional[type_], info)

    def build(self, model_name: str) -> type[BaseModel]:
        return create_model(
            model_name,
            __config__=ConfigDict(populate_by_name=True, extra="forbid"),
            **self.fields,
        )


def build_filter_input_model(
    model_name: str, base_type: Any, operator_names: Iterable[Any]
) -> type[BaseModel]:
    """Pydantic model with one optional field per requested operator."""
    collector = FieldCollector()
    declare_filter_arguments(collector, base_type, operator_names)
    return collector.build(model_name)
