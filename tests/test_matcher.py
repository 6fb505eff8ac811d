"""Tests for query tree matching."""

from cube_bridge.core.errors import UnresolvedReferenceWarning
from cube_bridge.core.models import TimeDimension
from cube_bridge.query.mbql import AggregationRef, FieldId, GenericQuery


def extract(matcher, query):
    return matcher.extract(GenericQuery.parse(query))


def test_measures_and_dimensions_from_field_list(matcher):
    extraction = extract(
        matcher, {"fields": [["field-id", 1], ["field-id", 3], ["field-id", 2]]}
    )

    assert extraction.measures == ["count", "total_revenue"]
    assert extraction.dimensions == ["status"]
    assert extraction.warnings == []


def test_measures_from_nested_aggregations(matcher):
    extraction = extract(
        matcher,
        {
            "aggregation": [
                ["aggregation-options", ["count"], {"display-name": "Orders"}],
                [
                    "+",
                    ["aggregation-options", ["sum", ["field-id", 2]], {"display-name": "Revenue"}],
                    1,
                ],
            ]
        },
    )

    assert extraction.measures == ["Orders", "Revenue"]


def test_measures_are_deduplicated_keeping_first_occurrence(matcher):
    extraction = extract(
        matcher,
        {
            "fields": [["field-id", 1]],
            "aggregation": [
                ["aggregation-options", ["count"], {"display-name": "count"}],
                ["aggregation-options", ["count"], {"display-name": "Orders"}],
            ],
        },
    )

    assert extraction.measures == ["count", "Orders"]


def test_aggregation_without_display_name_is_not_a_measure(matcher):
    extraction = extract(matcher, {"aggregation": [["count"]]})

    assert extraction.measures == []


def test_breakout_fields_are_dimensions(matcher):
    extraction = extract(
        matcher,
        {
            "fields": [["field-id", 3]],
            "breakout": [["field-id", 3], ["field-id", 5], ["field-id", 1]],
        },
    )

    # Breakouts are dimensions whatever their role tag
    assert extraction.dimensions == ["status", "is_paid", "count"]


def test_bucketed_breakout_becomes_time_dimension(matcher):
    extraction = extract(
        matcher,
        {"breakout": [["field-id", 3], ["datetime-field", ["field-id", 4], "month"]]},
    )

    assert extraction.dimensions == ["status"]
    assert extraction.time_dimensions == [
        TimeDimension(dimension="created_at", granularity="month")
    ]


def test_time_dimensions_found_anywhere_and_deduplicated(matcher):
    extraction = extract(
        matcher,
        {
            "breakout": [["datetime-field", ["field-id", 4], "default"]],
            "order-by": [["asc", ["datetime-field", ["field-id", 4], "default"]]],
            "filter": ["=", ["datetime-field", ["field-id", 4], "week"], "2020-01-06"],
        },
    )

    assert extraction.time_dimensions == [
        TimeDimension(dimension="created_at", granularity="day"),
        TimeDimension(dimension="created_at", granularity="week"),
    ]


def test_order_by_fields(matcher):
    extraction = extract(
        matcher,
        {
            "order-by": [
                ["desc", ["field-id", 3]],
                ["asc", ["datetime-field", ["field-id", 4], "month"]],
            ]
        },
    )

    assert extraction.order == {"status": "desc", "created_at": "asc"}


def test_order_by_aggregation_ordinal_is_zero_based(matcher):
    query = {
        "aggregation": [
            ["aggregation-options", ["count"], {"display-name": "Orders"}],
            ["aggregation-options", ["sum", ["field-id", 2]], {"display-name": "Revenue"}],
        ],
        "order-by": [["desc", ["aggregation", 1]], ["asc", ["aggregation", 0]]],
    }

    extraction = extract(matcher, query)

    assert extraction.order == {"Revenue": "desc", "Orders": "asc"}


def test_order_by_aggregation_ordinal_skips_unnamed_aggregations(matcher):
    query = {
        "aggregation": [
            ["aggregation-options", ["count"], {}],
            ["aggregation-options", ["sum", ["field-id", 2]], {"display-name": "Revenue"}],
        ],
        "order-by": [["desc", ["aggregation", 0]]],
    }

    extraction = extract(matcher, query)

    assert extraction.order == {"Revenue": "desc"}
    assert extraction.warnings == []


def test_unresolved_order_by_is_dropped(matcher):
    extraction = extract(
        matcher,
        {
            "aggregation": [["aggregation-options", ["count"], {"display-name": "Orders"}]],
            "order-by": [
                ["asc", ["field-id", 999]],
                ["desc", ["aggregation", 5]],
                ["asc", ["field-id", 3]],
            ],
        },
    )

    assert extraction.order == {"status": "asc"}
    assert None not in extraction.order
    assert UnresolvedReferenceWarning("order-by", FieldId(id=999)) in extraction.warnings
    assert UnresolvedReferenceWarning("order-by", AggregationRef(index=5)) in extraction.warnings


def test_unresolved_fields_are_dropped_with_warnings(matcher):
    extraction = extract(
        matcher,
        {
            "fields": [["field-id", 1], ["field-id", 100]],
            "breakout": [["field-id", 101]],
            "aggregation": [["aggregation-options", ["count"], {"display-name": "Orders"}]],
        },
    )

    assert extraction.measures == ["count", "Orders"]
    assert extraction.dimensions == []
    assert [warning.clause for warning in extraction.warnings] == ["fields", "breakout"]


def test_empty_query_extracts_nothing(matcher):
    extraction = extract(matcher, {"source-table": 1})

    assert extraction.measures == []
    assert extraction.dimensions == []
    assert extraction.time_dimensions == []
    assert extraction.order == {}
    assert extraction.filters == []
