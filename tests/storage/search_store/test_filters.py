from datetime import date, datetime, timedelta, timezone

import pytest

from solrstore.core.exceptions import ErrorCode
from solrstore.storage.search_store import (
    FilterCompiler,
    FilterHint,
    FilterOperator,
    FilterTerm,
    MissingFilterValueError,
    UnknownFilterOperatorError,
    UnsupportedFilterShapeError,
)


@pytest.mark.parametrize(
    "filters, expected",
    [
        ({"field": {"type": "equal", "value": "x"}}, ['field:"x"']),
        (
            {"field": {"type": "greaterOrEqual", "value": 5}},
            ["field:[5 TO *]"],
        ),
        ({"field": {"type": "notEqual", "value": "x"}}, ['-field:"x"']),
        ({"field": {"type": "search", "value": "foo"}}, ["field:*foo*"]),
        ({"field": {"type": "greater", "value": 5}}, ["field:{5 TO *}"]),
        ({"field": {"type": "lesser", "value": 5}}, ["field:{* TO 5}"]),
        ({"field": {"type": "lesserOrEqual", "value": 5}}, ["field:[* TO 5]"]),
        ({"field": "x"}, ['field:"x"']),
        ({"field": {"value": "x"}}, ['field:"x"']),
    ],
)
def test_compile_templates(filters, expected):
    assert FilterCompiler.compile(filters) == expected


def test_compile_or_order():
    assert FilterCompiler.compile(
        {"field": {"type": "equal", "value": ["a", "b"]}}
    ) == ['field:"a" OR field:"b"']
    assert FilterCompiler.compile({"field": ["b", "a"]}) == [
        'field:"b" OR field:"a"'
    ]


def test_compile_many_fields():
    filters = {
        "id": [
            {"type": "notEqual", "value": "some-id"},
            {"type": "equal", "value": "other-id"},
        ],
        "quantity": [
            {"type": "greater", "value": 10},
            {"type": "lesserOrEqual", "value": 100},
        ],
        "status": "active",
        "name": {"type": "search", "value": "foo"},
    }
    assert FilterCompiler.compile(filters) == [
        '-id:"some-id" OR id:"other-id"',
        "quantity:{10 TO *} OR quantity:[* TO 100]",
        'status:"active"',
        "name:*foo*",
    ]


def test_compile_mixed_terms():
    assert FilterCompiler.compile(
        {"field": ["a", {"type": "notEqual", "value": "b"}]}
    ) == ['field:"a" OR -field:"b"']
    assert FilterCompiler.compile(
        {"field": FilterTerm(type=FilterOperator.LESSER, value=3)}
    ) == ["field:{* TO 3}"]


def test_compile_hints():
    hints = {
        "name": {"field": "full_name", "type": "search"},
        "age": FilterHint(type=FilterOperator.GREATER_OR_EQUAL),
    }
    assert FilterCompiler.compile(
        {"name": "jo", "age": 18, "other": "x"}, hints
    ) == ["full_name:*jo*", "age:[18 TO *]", 'other:"x"']
    assert FilterCompiler.compile(
        {"name": {"type": "equal", "value": "jo"}}, hints
    ) == ['full_name:"jo"']


def test_compile_empty():
    assert FilterCompiler.compile(None) == []
    assert FilterCompiler.compile({}) == []


def test_compile_values():
    assert FilterCompiler.compile({"count": 0}) == ['count:"0"']
    assert FilterCompiler.compile({"active": False}) == ['active:"false"']
    assert FilterCompiler.compile(
        {"active": {"type": "notEqual", "value": True}}
    ) == ['-active:"true"']

    moment = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
    assert FilterCompiler.compile(
        {"date": {"type": "greater", "value": moment}}
    ) == ["date:{2024-01-02T03:04:05Z TO *}"]
    assert FilterCompiler.compile(
        {"date": {"type": "lesser", "value": date(2024, 1, 2)}}
    ) == ["date:{* TO 2024-01-02T00:00:00Z}"]
    assert FilterCompiler.compile(
        {"type": FilterOperator.SEARCH}
    ) == ['type:"search"']


@pytest.mark.parametrize(
    "filters",
    [
        {"field": {"type": "equal", "value": ["a", ["nested"]]}},
        {"field": [["a"]]},
        {"field": {"type": "equal", "value": {"a": 1}}},
        {"field": {"some": "object"}},
        {"field": {"type": "equal", "value": [{"a": 1}]}},
    ],
)
def test_compile_unsupported_shape(filters):
    with pytest.raises(UnsupportedFilterShapeError) as e:
        FilterCompiler.compile(filters)
    assert e.value.code == ErrorCode.UNSUPPORTED_FILTER


def test_compile_not_a_mapping():
    with pytest.raises(UnsupportedFilterShapeError):
        FilterCompiler.compile(["field"])


@pytest.mark.parametrize(
    "filters",
    [
        {"field": None},
        {"field": ""},
        {"field": []},
        {"field": {"type": "equal"}},
        {"field": {"type": "equal", "value": None}},
        {"field": {"type": "equal", "value": []}},
        {"field": {"type": "equal", "value": ["a", ""]}},
    ],
)
def test_compile_missing_value(filters):
    with pytest.raises(MissingFilterValueError) as e:
        FilterCompiler.compile(filters)
    assert e.value.code == ErrorCode.INVALID_FILTER_VALUE
    assert "Invalid filters for field 'field'" in e.value.message


def test_compile_unknown_operator():
    with pytest.raises(UnknownFilterOperatorError) as e:
        FilterCompiler.compile({"field": {"type": "like", "value": "x"}})
    assert e.value.code == ErrorCode.INVALID_FILTER_TYPE
    assert e.value.message == "'like' is not a valid or supported filter type."

    with pytest.raises(UnknownFilterOperatorError):
        FilterCompiler.compile({"field": "x"}, {"field": {"type": "like"}})


def test_compile_validation_order():
    with pytest.raises(UnsupportedFilterShapeError):
        FilterCompiler.compile({"field": {"type": "like", "value": [["a"]]}})
    with pytest.raises(MissingFilterValueError) as e:
        FilterCompiler.compile({"field": {"type": "like", "value": ""}})
    assert "Missing value for filter type like." in e.value.message


def test_compile_escaping():
    assert FilterCompiler.compile({"name": 'say "hi"'}) == [
        r'name:"say \"hi\""'
    ]
    assert FilterCompiler.compile({"path": "C:\\temp"}) == [
        r'path:"C:\\temp"'
    ]
    assert FilterCompiler.compile({"id": 'x" OR *:* OR "'}) == [
        r'id:"x\" OR *:* OR \""'
    ]
    assert FilterCompiler.compile(
        {"name": {"type": "search", "value": "a b:c*"}}
    ) == [r"name:*a\ b\:c\**"]
    assert FilterCompiler.compile(
        {"name": {"type": "search", "value": "foo"}}
    ) == ["name:*foo*"]


def test_compile_range_bounds():
    assert FilterCompiler.compile(
        {"price": {"type": "greater", "value": -1.5}}
    ) == ["price:{-1.5 TO *}"]
    assert FilterCompiler.compile(
        {"name": {"type": "lesserOrEqual", "value": "m] OR *:*"}}
    ) == ['name:[* TO "m] OR *:*"]']
    assert FilterCompiler.compile(
        {"name": {"type": "greaterOrEqual", "value": "*"}}
    ) == ['name:["*" TO *]']
    assert FilterCompiler.compile(
        {"name": {"type": "lesser", "value": "TO"}}
    ) == ['name:{* TO "TO"}']
