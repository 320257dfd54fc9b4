"""Unit tests for document filters, ordering and field transforms."""

import pytest

from ohshop_admin.domain.entities.document import (
    ArrayRemove,
    ArrayUnion,
    DeleteField,
    Document,
    FieldFilter,
    Increment,
    OrderBy,
    apply_changes,
    parse_timestamp,
    sort_documents,
)


def test_unknown_operator_is_rejected():
    with pytest.raises(ValueError):
        FieldFilter("name", "array-contains", "x")


def test_missing_field_never_matches_comparisons():
    assert not FieldFilter("price", ">", 1).matches({})
    assert not FieldFilter("name", "!=", "x").matches({})


def test_equals_none_matches_missing_and_null():
    flt = FieldFilter("company_id", "==", None)
    assert flt.matches({})
    assert flt.matches({"company_id": None})
    assert not flt.matches({"company_id": "c-1"})


def test_not_equals_none_matches_present_values():
    flt = FieldFilter("company_id", "!=", None)
    assert flt.matches({"company_id": ""})
    assert not flt.matches({"company_id": None})


def test_bool_and_int_are_different_kinds():
    assert not FieldFilter("deleted", "==", False).matches({"deleted": 0})
    assert FieldFilter("deleted", "==", False).matches({"deleted": False})
    assert FieldFilter("price", "==", 10).matches({"price": 10.0})


def test_in_operator():
    flt = FieldFilter("type", "in", ["MEMBERS", "Members"])
    assert flt.matches({"type": "Members"})
    assert not flt.matches({"type": "SELLAH"})


def test_sort_puts_missing_values_last_in_both_directions():
    docs = [
        Document("c", "a", {"position": 2}),
        Document("c", "b", {}),
        Document("c", "c", {"position": 1}),
    ]
    assert [d.id for d in sort_documents(docs, [OrderBy("position")])] == ["c", "a", "b"]
    assert [d.id for d in sort_documents(docs, [OrderBy("position", descending=True)])] == [
        "a",
        "c",
        "b",
    ]


def test_sort_by_several_keys():
    docs = [
        Document("c", "a", {"type": "x", "position": 2}),
        Document("c", "b", {"type": "y", "position": 1}),
        Document("c", "c", {"type": "x", "position": 1}),
    ]
    ordered = sort_documents(docs, [OrderBy("type"), OrderBy("position")])
    assert [d.id for d in ordered] == ["c", "a", "b"]


def test_apply_changes_transforms():
    current = {"tags": ["a", "b"], "clicks": 2, "old": True, "name": "x"}
    merged = apply_changes(
        current,
        {
            "tags": ArrayUnion("b", "c"),
            "clicks": Increment(3),
            "old": DeleteField(),
            "name": "y",
        },
    )
    assert merged == {"tags": ["a", "b", "c"], "clicks": 5, "name": "y"}
    assert current["tags"] == ["a", "b"]


def test_array_remove_and_increment_on_missing_field():
    merged = apply_changes({"tags": ["a", "b", "a"]}, {"tags": ArrayRemove("a"), "n": Increment()})
    assert merged == {"tags": ["b"], "n": 1}


def test_parse_timestamp_formats():
    assert parse_timestamp("2024-01-02T03:04:05Z").year == 2024
    assert parse_timestamp({"seconds": 0}).year == 1970
    assert parse_timestamp("not a date") is None
    assert parse_timestamp("") is None
