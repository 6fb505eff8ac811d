"""Tests for MBQL filter translation."""

import pytest

from cube_bridge.query.filters import FilterTranslator
from cube_bridge.query.mbql import parse_clause


@pytest.fixture
def filter_translator(resolver):
    return FilterTranslator(resolver)


def translate(filter_translator, clause):
    return filter_translator.translate(parse_clause(clause))


@pytest.mark.parametrize(
    "operator, cube_operator",
    [
        ("=", "equals"),
        ("!=", "notEquals"),
        (">", "gt"),
        ("<", "lt"),
        (">=", "gte"),
        ("<=", "lte"),
        ("starts-with", "startsWith"),
        ("ends-with", "endsWith"),
        ("does-not-contain", "notContains"),
    ],
)
def test_value_operators(filter_translator, operator, cube_operator):
    filters, warnings = translate(filter_translator, [operator, ["field-id", 3], "shipped"])

    assert filters == [{"member": "status", "operator": cube_operator, "values": ["shipped"]}]
    assert warnings == []


def test_equals_with_several_values(filter_translator):
    filters, _ = translate(filter_translator, ["=", ["field-id", 3], "new", "shipped"])

    assert filters == [
        {"member": "status", "operator": "equals", "values": ["new", "shipped"]}
    ]


def test_string_options_are_ignored(filter_translator):
    filters, _ = translate(
        filter_translator, ["contains", ["field-id", 3], "ship", {"case-sensitive": False}]
    )

    assert filters == [{"member": "status", "operator": "contains", "values": ["ship"]}]


def test_numbers_and_booleans_become_strings(filter_translator):
    filters, _ = translate(
        filter_translator, ["and", [">", ["field-id", 2], 10.5], ["=", ["field-id", 5], False]]
    )

    assert filters == [
        {"member": "total_revenue", "operator": "gt", "values": ["10.5"]},
        {"member": "is_paid", "operator": "equals", "values": ["false"]},
    ]


def test_null_checks(filter_translator):
    filters, _ = translate(
        filter_translator, ["and", ["is-null", ["field-id", 3]], ["not-null", ["field-id", 5]]]
    )

    assert filters == [
        {"member": "status", "operator": "notSet"},
        {"member": "is_paid", "operator": "set"},
    ]


def test_between_on_datetime_field_is_a_date_range(filter_translator):
    filters, _ = translate(
        filter_translator,
        ["between", ["datetime-field", ["field-id", 4], "day"], "2020-01-01", "2020-12-31"],
    )

    assert filters == [
        {"member": "created_at", "operator": "inDateRange", "values": ["2020-01-01", "2020-12-31"]}
    ]


def test_between_on_plain_field_is_a_closed_interval(filter_translator):
    filters, _ = translate(filter_translator, ["between", ["field-id", 2], 1, 5])

    assert filters == [
        {
            "and": [
                {"member": "total_revenue", "operator": "gte", "values": ["1"]},
                {"member": "total_revenue", "operator": "lte", "values": ["5"]},
            ]
        }
    ]


def test_or_is_kept_as_logical_group(filter_translator):
    filters, warnings = translate(
        filter_translator, ["or", ["=", ["field-id", 3], "new"], ["=", ["field-id", 3], "paid"]]
    )

    assert filters == [
        {
            "or": [
                {"member": "status", "operator": "equals", "values": ["new"]},
                {"member": "status", "operator": "equals", "values": ["paid"]},
            ]
        }
    ]
    assert warnings == []


def test_or_with_one_resolvable_branch_collapses(filter_translator):
    filters, warnings = translate(
        filter_translator, ["or", ["=", ["field-id", 999], "x"], ["not-null", ["field-id", 3]]]
    )

    assert filters == [{"member": "status", "operator": "set"}]
    assert [warning.clause for warning in warnings] == ["filter"]


def test_not_is_dropped(filter_translator):
    filters, warnings = translate(filter_translator, ["not", ["=", ["field-id", 3], "new"]])

    assert filters == []
    assert len(warnings) == 1


def test_unsupported_and_unresolved_parts_are_dropped(filter_translator):
    filters, warnings = translate(
        filter_translator,
        [
            "and",
            ["=", ["field-id", 999], "x"],
            ["time-interval", ["field-id", 4], -30, "day"],
            ["=", ["field-id", 3], "new"],
        ],
    )

    assert filters == [{"member": "status", "operator": "equals", "values": ["new"]}]
    assert [warning.clause for warning in warnings] == ["filter", "filter"]


def test_no_filter(filter_translator):
    assert filter_translator.translate(None) == ([], [])
