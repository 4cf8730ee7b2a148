"""Unit tests for the argument bundle."""

import pytest
from pydantic import ValidationError

from querykit.core.exceptions import InvalidQueryArgumentsError
from querykit.core.filters import FilterOperator, build_filter_input_model
from querykit.core.query import QueryArgs, SortSpec, parse_args
from querykit.core.sorting import build_sort_input_model, declare_sort_input, init_order_enum


class TestQueryArgs:
    """Tests for top-level bundle keys."""

    def test_all_keys_are_optional(self) -> None:
        """Test that an empty bundle has no effect."""
        args = QueryArgs.model_validate({})

        assert args.filters() == {}
        assert args.searches() == {}
        assert args.sorters() == []

    def test_unknown_keys_are_ignored(self) -> None:
        """Test that unrecognised keys are ignored."""
        args = QueryArgs.model_validate({"first": 10, "after": "cursor"})
        assert args.filter_by is None

    def test_limit_and_offset_are_accepted(self) -> None:
        """Test that pagination keys are accepted."""
        args = QueryArgs.model_validate({"limit": 10, "offset": 20})
        assert (args.limit, args.offset) == (10, 20)

    def test_negative_limit_is_rejected(self) -> None:
        """Test that a negative limit is rejected."""
        with pytest.raises(ValidationError):
            QueryArgs.model_validate({"limit": -1})

    @pytest.mark.parametrize(
        "payload",
        [
            {"filter_by": {"id; DROP TABLE widgets": {"eq": 1}}},
            {"search_by": {"name)--": "x"}},
            {"sort_by": {"field": "date desc, id", "order": "ASC"}},
        ],
    )
    def test_field_names_must_be_identifiers(self, payload) -> None:
        """Test that field names other than identifiers are rejected."""
        with pytest.raises(ValidationError):
            QueryArgs.model_validate(payload)


class TestFilterBy:
    """Tests for filter_by."""

    def test_filter_operators_become_enum_members(self) -> None:
        """Test that operator names become FilterOperator members."""
        args = QueryArgs.model_validate({"filter_by": {"price": {"gte": 10, "lt": 20}}})

        assert args.filters() == {"price": {FilterOperator.GTE: 10, FilterOperator.LT: 20}}

    def test_empty_filter_entries_are_dropped(self) -> None:
        """Test that empty filter entries are removed."""
        args = QueryArgs.model_validate({"filter_by": {"price": None, "name": {}}})
        assert args.filters() == {}

    def test_unknown_filter_operator_is_rejected(self) -> None:
        """Test that an unknown operator fails validation."""
        with pytest.raises(ValidationError):
            QueryArgs.model_validate({"filter_by": {"price": {"between": [1, 2]}}})


class TestSearchBy:
    """Tests for search_by."""

    def test_none_search_terms_are_dropped(self) -> None:
        """Test that None search terms are removed."""
        args = QueryArgs.model_validate({"search_by": {"email": None, "phone": "555"}})
        assert args.searches() == {"phone": "555"}

    def test_numeric_search_terms_become_text(self) -> None:
        """Test that numeric search terms are converted to strings."""
        args = QueryArgs.model_validate({"search_by": {"phone": 555, "price": 9.5}})
        assert args.searches() == {"phone": "555", "price": "9.5"}

    def test_boolean_search_term_is_rejected(self) -> None:
        """Test that a boolean search term fails validation."""
        with pytest.raises(ValidationError):
            QueryArgs.model_validate({"search_by": {"name": True}})


class TestSortBy:
    """Tests for sort_by and SortSpec."""

    def test_single_sort_spec_becomes_list(self) -> None:
        """Test that a lone spec is wrapped in a list."""
        args = QueryArgs.model_validate({"sort_by": {"field": "date", "order": "desc"}})
        assert args.sorters() == [SortSpec(field="date", order="desc")]

    def test_sort_list_drops_none_entries(self) -> None:
        """Test that None entries are removed from the sort list."""
        args = QueryArgs.model_validate(
            {"sort_by": [None, {"field": "date", "order": "ASC"}, None]}
        )
        assert args.sorters() == [SortSpec(field="date", order="ASC")]

    def test_missing_sort_keys_default_to_empty(self) -> None:
        """Test that a missing order makes the spec empty."""
        spec = SortSpec.model_validate({"field": "date"})

        assert spec.order == ""
        assert spec.is_empty

    def test_none_sort_values_default_to_empty(self) -> None:
        """Test that a None field makes the spec empty."""
        assert SortSpec.model_validate({"field": None, "order": "ASC"}).is_empty

    @pytest.mark.parametrize("order", ["sideways", "ASC; DROP TABLE widgets"])
    def test_invalid_sort_order_is_rejected(self, order) -> None:
        """Test that orders other than ASC or DESC are rejected."""
        with pytest.raises(ValidationError):
            SortSpec.model_validate({"field": "date", "order": order})

    def test_sort_by_must_be_spec_or_list(self) -> None:
        """Test that a bare string is not a sort spec."""
        with pytest.raises(ValidationError):
            QueryArgs.model_validate({"sort_by": "date"})


class TestParseArgs:
    """Tests for parse_args."""

    def test_returns_query_args_unchanged(self) -> None:
        """Test that a QueryArgs instance is passed through."""
        args = QueryArgs()
        assert parse_args(args) is args

    def test_none_means_no_arguments(self) -> None:
        """Test that None parses to an empty bundle."""
        assert parse_args(None).sorters() == []

    def test_wraps_validation_errors(self) -> None:
        """Test that validation errors become InvalidQueryArgumentsError."""
        with pytest.raises(InvalidQueryArgumentsError) as exc_info:
            parse_args({"sort_by": {"field": "date", "order": "up"}})

        error = exc_info.value
        assert error.code == "INVALID_QUERY_ARGUMENTS"
        assert isinstance(error.__cause__, ValidationError)
        assert any(key.startswith("sort_by") for key in error.details)


class TestSchemaModels:
    """Argument bundles built from generated input models."""

    def test_filter_model_instances_are_dumped(self) -> None:
        """Test that generated filter model instances are accepted."""
        StatusFilter = build_filter_input_model("StatusFilter", str, ["eq", "in"])
        args = QueryArgs.model_validate(
            {"filter_by": {"status": StatusFilter.model_validate({"in": ["open"]})}}
        )

        assert args.filters() == {"status": {FilterOperator.IN: ["open"]}}

    def test_sort_model_instances_are_converted(self, monkeypatch) -> None:
        """Test that generated sort model instances are accepted."""
        from querykit.core.sorting import declarations

        monkeypatch.setattr(declarations, "_order_enum", None)
        init_order_enum()
        SortInput = build_sort_input_model(declare_sort_input("Order", ["createdAt"]))
        sort = SortInput.model_validate({"field": "createdAt", "order": "DESC"})

        args = QueryArgs.model_validate({"sort_by": [sort]})

        assert args.sorters() == [SortSpec(field="createdAt", order="DESC")]
