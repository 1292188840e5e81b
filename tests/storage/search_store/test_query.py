import pytest

from solrstore.storage.search_store import (
    DistinctParams,
    Endpoint,
    EndpointPreset,
    InvalidParametersError,
    QueryBuilder,
    SearchParams,
    Totals,
)


def test_build_get():
    assert QueryBuilder.build_get() == {
        "query": "*:*",
        "offset": 0,
        "limit": 500,
    }
    assert QueryBuilder.build_get(
        {
            "page": 2,
            "limit": 5,
            "filters": {
                "id": {"type": "notEqual", "value": "other-id"},
                "some": "data",
            },
            "order": {"id": "asc", "some": "desc"},
        }
    ) == {
        "query": "*:*",
        "offset": 5,
        "limit": 5,
        "filter": ['-id:"other-id"', 'some:"data"'],
        "sort": "id asc, some desc",
    }


@pytest.mark.parametrize(
    "params",
    [
        {"page": 0},
        {"limit": -1},
        {"order": {"id": "sideways"}},
        {"filters": "id"},
    ],
)
def test_build_get_invalid(params):
    with pytest.raises(InvalidParametersError):
        QueryBuilder.build_get(params)


def test_build_totals():
    assert QueryBuilder.build_totals(
        SearchParams(page=3, limit=10, filters={"a": 1})
    ) == {"query": "*:*", "offset": 0, "limit": 0, "filter": ['a:"1"']}


def test_build_delete():
    assert QueryBuilder.build_delete(
        {"status": "old", "count": {"type": "lesser", "value": 3}}
    ) == {"delete": {"query": 'status:"old" AND count:{* TO 3}'}}
    assert QueryBuilder.build_delete(None) == {}
    assert QueryBuilder.build_delete({}) == {}


def test_build_distinct():
    body = QueryBuilder.build_distinct({"key": "sku", "page": 2, "limit": 10})
    assert body == {
        "query": "*:*",
        "params": {
            "group": True,
            "group.field": "sku",
            "group.limit": 1,
            "group.main": True,
            "rows": 10,
            "start": 10,
        },
    }
    body = QueryBuilder.build_distinct(
        DistinctParams(key="sku", filters={"status": "active"})
    )
    assert body["filter"] == ['status:"active"']
    assert body["params"]["rows"] == 500
    assert body["params"]["start"] == 0


@pytest.mark.parametrize("key", [None, 1, "", ["sku"], {"sku": 1}])
def test_build_distinct_invalid_key(key):
    with pytest.raises(InvalidParametersError) as e:
        QueryBuilder.build_distinct({"key": key})
    assert e.value.message.startswith("Invalid distinct parameters")


def test_build_group():
    assert QueryBuilder.build_group(
        {"key": "brand", "group_limit": 2, "order": {"price": "asc"}}
    ) == {
        "query": "*:*",
        "params": {
            "group": True,
            "group.field": "brand",
            "group.limit": 2,
            "rows": 500,
            "start": 0,
        },
        "sort": "price asc",
    }


def test_build_facet():
    assert QueryBuilder.build_facet({"field": "brand", "limit": 20}) == {
        "query": "*:*",
        "params": {
            "facet": True,
            "facet.mincount": 1,
            "facet.limit": 20,
            "facet.offset": 0,
            "rows": 0,
            "facet.field": "brand",
        },
    }
    body = QueryBuilder.build_facet(
        {"field": ["brand", "color"], "mincount": 0, "page": 2, "limit": 5}
    )
    assert body["params"]["facet.pivot"] == "brand,color"
    assert body["params"]["facet.offset"] == 5
    assert body["params"]["facet.mincount"] == 0
    assert "facet.field" not in body["params"]


def test_get_sort():
    assert QueryBuilder.get_sort({"a": "asc", "b": "desc"}) == "a asc, b desc"


@pytest.mark.parametrize(
    "total, limit, page, pages",
    [
        (10, 500, 1, 1),
        (0, 500, 1, 0),
        (1000, 500, 2, 2),
        (1001, 500, 3, 3),
        (10, 0, 1, 0),
    ],
)
def test_get_totals(total, limit, page, pages):
    assert QueryBuilder.get_totals(total, limit, page) == Totals(
        total=total, page_size=limit, pages=pages, page=page
    )


def test_endpoint():
    url = "http://localhost:8983/"
    assert (
        Endpoint.build(EndpointPreset.QUERY, url, "test")
        == "http://localhost:8983/solr/test/query"
    )
    assert (
        Endpoint.build("update", url, "test")
        == "http://localhost:8983/solr/test/update/json/docs?commit=true"
    )
    assert Endpoint.build(
        EndpointPreset.CORE_CREATE, url, "my core", config_set="_default"
    ) == (
        "http://localhost:8983/solr/admin/cores?action=CREATE"
        "&name=my%20core&instanceDir=my%20core&configSet=_default"
    )

    with pytest.raises(InvalidParametersError):
        Endpoint.build("unknown", url, "test")
    with pytest.raises(InvalidParametersError):
        Endpoint.build(EndpointPreset.CORE_CREATE, url, "test")
