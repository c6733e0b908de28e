"""Tests for client-side search and filtering."""

import copy
from datetime import date, datetime

import pytest


def _filter(key, kind, value, options=()):
    from src.grid.models import FilterDescriptor

    return FilterDescriptor(key=key, label=key.title(), kind=kind, options=options, value=value)


class TestSearch:
    """Tests for the free-text search."""

    def test_blank_query_returns_all_rows(self, installment_rows):
        """Test empty and whitespace queries keep every row."""
        from src.grid.filter_engine import apply_filters

        assert apply_filters(installment_rows, "") == installment_rows
        assert apply_filters(installment_rows, "   ") == installment_rows
        assert apply_filters(installment_rows, None) == installment_rows

    def test_search_is_case_insensitive(self, installment_rows):
        """Test 'kyly' finds the KYLY installment only."""
        from src.grid.filter_engine import apply_filters

        result = apply_filters(installment_rows, "kyly")

        assert [r["id"] for r in result] == ["3"]

    def test_search_trims_query(self, installment_rows):
        """Test surrounding whitespace is ignored."""
        from src.grid.filter_engine import apply_filters

        assert [r["id"] for r in apply_filters(installment_rows, "  grendene ")] == ["2"]

    def test_search_reaches_nested_values(self):
        """Test nested mappings are searchable through their values."""
        from src.grid.filter_engine import apply_filters

        rows = [
            {"id": "1", "descricao": "Parcela 1", "credor": {"nome": "ACME"}},
            {"id": "2", "descricao": "Parcela 2", "credor": None},
        ]

        assert [r["id"] for r in apply_filters(rows, "acme")] == ["1"]

    def test_search_matches_numbers_without_decimal_suffix(self, installment_rows):
        """Test integral floats render without '.0'."""
        from src.grid.filter_engine import apply_filters

        assert [r["id"] for r in apply_filters(installment_rows, "4543")] == ["1"]
        assert apply_filters(installment_rows, "4543.0") == []

    def test_search_matches_booleans_as_words(self):
        """Test booleans render as true/false."""
        from src.grid.filter_engine import apply_filters

        rows = [{"id": "1", "ativo": True}, {"id": "2", "ativo": False}]

        assert [r["id"] for r in apply_filters(rows, "true")] == ["1"]

    def test_search_results_contain_query(self, installment_rows):
        """Test every result contains the query in some field."""
        from src.grid.filter_engine import apply_filters
        from src.utils.formatting import to_text

        for row in apply_filters(installment_rows, "ltda"):
            assert any("ltda" in to_text(v).lower() for v in row.values())


class TestFilters:
    """Tests for per-column filters."""

    def test_empty_filters_are_identity(self, installment_rows):
        """Test filters without a value do not narrow."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import DateRange, FilterKind

        filters = [
            _filter("status", FilterKind.SELECT, None),
            _filter("descricao", FilterKind.TEXT, ""),
            _filter("forma_pagto", FilterKind.SELECT, []),
            _filter("data_vencimento", FilterKind.DATE_RANGE, DateRange()),
        ]

        assert apply_filters(installment_rows, "", filters) == installment_rows

    def test_select_filter(self, installment_rows):
        """Test select compares by equality."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        result = apply_filters(installment_rows, "", [_filter("status", FilterKind.SELECT, "vencido")])

        assert [r["id"] for r in result] == ["2", "5"]

    def test_select_filter_compares_string_forms(self):
        """Test string option values match boolean and integer fields."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        rows = [{"id": 1, "ativo": True, "n": 2}, {"id": 2, "ativo": False, "n": 3}]

        assert [r["id"] for r in apply_filters(rows, "", [_filter("ativo", FilterKind.SELECT, "false")])] == [2]
        assert [r["id"] for r in apply_filters(rows, "", [_filter("n", FilterKind.SELECT, "2")])] == [1]

    def test_text_filter_is_substring(self, installment_rows):
        """Test text filter uses case-insensitive containment."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        result = apply_filters(installment_rows, "", [_filter("descricao", FilterKind.TEXT, "moda")])

        assert [r["id"] for r in result] == ["5"]

    def test_boolean_filter_false_is_a_value(self):
        """Test False narrows instead of being treated as empty."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        rows = [{"id": "1", "ativo": True}, {"id": "2", "ativo": False}, {"id": "3", "ativo": "sim"}]

        result = apply_filters(rows, "", [_filter("ativo", FilterKind.BOOLEAN, False)])
        assert [r["id"] for r in result] == ["2"]

        result = apply_filters(rows, "", [_filter("ativo", FilterKind.BOOLEAN, "true")])
        assert [r["id"] for r in result] == ["1", "3"]

    def test_number_filter(self, installment_rows):
        """Test number filter compares numerically and skips non-numbers."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        rows = installment_rows + [{"id": "6", "valor_parcela": "n/a"}]

        result = apply_filters(rows, "", [_filter("valor_parcela", FilterKind.NUMBER, "4543")])
        assert [r["id"] for r in result] == ["1"]

        assert apply_filters(rows, "", [_filter("valor_parcela", FilterKind.NUMBER, 0)]) == []

    def test_number_filter_thousands_separator(self):
        """Test Brazilian thousands groups match and mixed notation matches nothing."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        rows = [{"id": "1", "valor_parcela": 1234.56}, {"id": "2", "valor_parcela": 1.23456}]

        result = apply_filters(rows, "", [_filter("valor_parcela", FilterKind.NUMBER, "1.234,56")])
        assert [r["id"] for r in result] == ["1"]

        assert apply_filters(rows, "", [_filter("valor_parcela", FilterKind.NUMBER, "1,234.56")]) == []

    def test_date_filter_same_day(self, installment_rows):
        """Test date filter compares calendar days."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        rows = installment_rows + [{"id": "6", "data_vencimento": "2024-05-05T18:30:00Z"}]

        result = apply_filters(rows, "", [_filter("data_vencimento", FilterKind.DATE, date(2024, 5, 5))])

        assert [r["id"] for r in result] == ["1", "6"]

    def test_date_range_is_inclusive(self, installment_rows):
        """Test both bounds of a date range are included."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import DateRange, FilterKind

        date_range = DateRange(date(2024, 5, 5), date(2024, 6, 15))
        result = apply_filters(installment_rows, "", [_filter("data_vencimento", FilterKind.DATE_RANGE, date_range)])

        assert [r["id"] for r in result] == ["1", "2", "5"]

    def test_date_range_missing_bound_passes_everything(self, installment_rows):
        """Test a half-open range does not filter."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import DateRange, FilterKind

        date_range = DateRange(start="2024-06-01")
        result = apply_filters(installment_rows, "", [_filter("data_vencimento", FilterKind.DATE_RANGE, date_range)])

        assert result == installment_rows

    def test_date_range_skips_unparseable_values(self):
        """Test rows whose date cannot be parsed do not match."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import DateRange, FilterKind

        rows = [{"id": "1", "d": "not a date"}, {"id": "2", "d": "10/05/2024"}, {"id": "3", "d": None}]
        date_range = {"start": "2024-05-01", "end": "2024-05-31"}

        result = apply_filters(rows, "", [_filter("d", FilterKind.DATE_RANGE, date_range)])

        assert [r["id"] for r in result] == ["2"]

    def test_filters_compose_with_and(self, installment_rows):
        """Test the result equals the intersection of single-filter results."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import DateRange, FilterKind

        status = _filter("status", FilterKind.SELECT, "a_vencer")
        due = _filter("data_vencimento", FilterKind.DATE_RANGE, DateRange("2024-05-01", "2024-05-31"))

        both = apply_filters(installment_rows, "", [status, due])
        only_status = apply_filters(installment_rows, "", [status])
        only_due = apply_filters(installment_rows, "", [due])

        assert both == [r for r in only_status if r in only_due]
        assert [r["id"] for r in both] == ["1"]

    def test_filtering_is_idempotent(self, installment_rows):
        """Test applying the same filters twice gives the same result."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        filters = [_filter("status", FilterKind.SELECT, "vencido")]
        once = apply_filters(installment_rows, "ltda", filters)

        assert apply_filters(once, "ltda", filters) == once

    def test_rows_and_descriptors_are_not_mutated(self, installment_rows):
        """Test apply_filters returns a new list and leaves inputs alone."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        before = copy.deepcopy(installment_rows)
        descriptor = _filter("status", FilterKind.SELECT, "pago")

        result = apply_filters(installment_rows, "kyly", [descriptor])

        assert result is not installment_rows
        assert installment_rows == before
        assert descriptor.value == "pago"

    def test_missing_field_does_not_raise(self):
        """Test filters on absent keys simply do not match."""
        from src.grid.filter_engine import apply_filters
        from src.grid.models import FilterKind

        rows = [{"id": "1"}]
        for kind, value in [
            (FilterKind.TEXT, "x"),
            (FilterKind.NUMBER, 1),
            (FilterKind.DATE, datetime(2024, 1, 1)),
        ]:
            assert apply_filters(rows, "", [_filter("missing", kind, value)]) == []

    @pytest.mark.parametrize("value", [None, "", "  ", [], ()])
    def test_empty_values(self, value):
        """Test values that mean 'no filter'."""
        from src.grid.models import is_empty_value

        assert is_empty_value(value)

    @pytest.mark.parametrize("value", [False, 0, "0", "pago"])
    def test_real_values(self, value):
        """Test falsy values that still filter."""
        from src.grid.models import is_empty_value

        assert not is_empty_value(value)
