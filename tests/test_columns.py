"""
Tests for column class parsing.
"""

from responsive_images.grid.columns import normalize_signature, parse_columns, parse_token
from responsive_images.models import ColumnFraction


def test_parse_breakpoint_columns():
    fractions = parse_columns("col-md-6 col-lg-4")
    assert fractions == {
        ColumnFraction(numerator=6, breakpoint="md"),
        ColumnFraction(numerator=4, breakpoint="lg"),
    }


def test_parse_unscoped_columns():
    """Test col-N and col-xs-N both map to xs."""
    assert parse_columns("col-6") == {ColumnFraction(numerator=6, breakpoint="xs")}
    assert parse_columns("col-xs-6") == {ColumnFraction(numerator=6, breakpoint="xs")}


def test_parse_bare_col_fills_grid():
    assert parse_columns("col") == {ColumnFraction(numerator=12, breakpoint="xs")}
    assert parse_columns("col-lg") == {ColumnFraction(numerator=12, breakpoint="lg")}
    assert parse_columns("col", grid_columns=24) == {ColumnFraction(numerator=24, breakpoint="xs")}


def test_parse_ignores_other_classes():
    """Test that arbitrary CSS classes are dropped."""
    fractions = parse_columns("text-center col-6 mb-3 column d-flex")
    assert fractions == {ColumnFraction(numerator=6, breakpoint="xs")}


def test_parse_deduplicates():
    fractions = parse_columns(["col-6", "col-6 col-6"])
    assert len(fractions) == 1


def test_parse_drops_out_of_range_numerators():
    assert parse_columns("col-13 col-md-0") == frozenset()


def test_parse_drops_unknown_breakpoints_when_known():
    known = {"sm", "md", "lg"}
    assert parse_token("col-auto", breakpoints=known) is None
    assert parse_token("col-xs-4", breakpoints=known) == ColumnFraction(numerator=4)
    assert parse_token("col-md-4", breakpoints=known) == ColumnFraction(numerator=4, breakpoint="md")


def test_parse_empty_input():
    assert parse_columns("") == frozenset()
    assert parse_columns(None) == frozenset()
    assert parse_columns([]) == frozenset()


def test_signature_is_order_independent():
    assert normalize_signature(parse_columns("col-6 col-lg-4")) == normalize_signature(
        parse_columns("col-lg-4 foo col-6")
    )
    assert normalize_signature(frozenset()) == ""
