"""Sort input declarations."""

from querykit.core.sorting.declarations import (
    EnumDeclaration,
    EnumValue,
    SortDeclarer,
    SortInputDeclaration,
    build_sort_input_model,
    create_order_enum,
    declare_sort_input,
    enum_class,
    get_order_enum,
    init_order_enum,
)

__all__ = [
    "EnumDeclaration",
    "EnumValue",
    "SortDeclarer",
    "SortInputDeclaration",
    "build_sort_input_model",
    "create_order_enum",
    "declare_sort_input",
    "enum_class",
    "get_order_enum",
    "init_order_enum",
]
