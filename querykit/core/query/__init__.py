"""Argument bundle parsing and query translation."""

from querykit.core.query.args import QueryArgs, SortSpec
from querykit.core.query.translator import QueryTranslator, parse_args, translate

__all__ = ["QueryArgs", "QueryTranslator", "SortSpec", "parse_args", "translate"]
