from __future__ import annotations

import math
from typing import Any

from ._filters import FilterCompiler
from ._models import (
    DistinctParams,
    FacetParams,
    GroupParams,
    SearchParams,
    SortDirection,
    Totals,
)

MATCH_ALL = "*:*"


class QueryBuilder:
    """Builds Solr JSON request bodies."""

    @staticmethod
    def build_get(params: dict | SearchParams | None = None) -> dict:
        params = SearchParams.parse(params)
        body: dict[str, Any] = {
            "query": MATCH_ALL,
            "offset": params.offset,
            "limit": params.limit,
        }
        QueryBuilder._add_filter(body, params)
        QueryBuilder._add_sort(body, params)
        return body

    @staticmethod
    def build_totals(params: dict | SearchParams | None = None) -> dict:
        params = SearchParams.parse(params)
        body: dict[str, Any] = {
            "query": MATCH_ALL,
            "offset": 0,
            "limit": 0,
        }
        QueryBuilder._add_filter(body, params)
        return body

    @staticmethod
    def build_delete(
        filters: dict[str, Any] | None,
        hints: dict[str, Any] | None = None,
    ) -> dict:
        """Build a delete by query command.

        Returns an empty body when no clause resolves. Callers must
        treat it as nothing to delete.
        """
        clauses = FilterCompiler.compile(filters, hints)
        if not clauses:
            return {}
        return {"delete": {"query": " AND ".join(clauses)}}

    @staticmethod
    def build_distinct(params: dict | DistinctParams) -> dict:
        params = DistinctParams.parse(
            params, message="Invalid distinct parameters"
        )
        body: dict[str, Any] = {
            "query": MATCH_ALL,
            "params": {
                **QueryBuilder._get_group_params(params.key, 1),
                "group.main": True,
                **QueryBuilder._get_page_params(params),
            },
        }
        QueryBuilder._add_filter(body, params)
        return body

    @staticmethod
    def build_group(params: dict | GroupParams) -> dict:
        params = GroupParams.parse(params, message="Invalid group parameters")
        body: dict[str, Any] = {
            "query": MATCH_ALL,
            "params": {
                **QueryBuilder._get_group_params(
                    params.key, params.group_limit
                ),
                **QueryBuilder._get_page_params(params),
            },
        }
        QueryBuilder._add_filter(body, params)
        QueryBuilder._add_sort(body, params)
        return body

    @staticmethod
    def build_facet(params: dict | FacetParams) -> dict:
        params = FacetParams.parse(params, message="Invalid facet parameters")
        facet_params: dict[str, Any] = {
            "facet": True,
            "facet.mincount": params.mincount,
            "facet.limit": params.limit,
            "facet.offset": params.offset,
            "rows": 0,
        }
        if isinstance(params.field, list):
            facet_params["facet.pivot"] = ",".join(params.field)
        else:
            facet_params["facet.field"] = params.field
        body: dict[str, Any] = {"query": MATCH_ALL, "params": facet_params}
        QueryBuilder._add_filter(body, params)
        return body

    @staticmethod
    def get_sort(order: dict[str, SortDirection | str]) -> str:
        return ", ".join(
            f"{field} {SortDirection(direction).value}"
            for field, direction in order.items()
        )

    @staticmethod
    def get_totals(total: int, limit: int, page: int = 1) -> Totals:
        pages = math.ceil(total / limit) if limit else 0
        return Totals(total=total, page_size=limit, pages=pages, page=page)

    @staticmethod
    def _add_filter(body: dict[str, Any], params: SearchParams) -> None:
        if not params.filters:
            return
        clauses = FilterCompiler.compile(params.filters, params.fields)
        if clauses:
            body["filter"] = clauses

    @staticmethod
    def _add_sort(body: dict[str, Any], params: SearchParams) -> None:
        if params.order:
            body["sort"] = QueryBuilder.get_sort(params.order)

    @staticmethod
    def _get_page_params(params: SearchParams) -> dict[str, int]:
        return {"rows": params.limit, "start": params.offset}

    @staticmethod
    def _get_group_params(key: str, limit: int) -> dict[str, Any]:
        return {
            "group": True,
            "group.field": key,
            "group.limit": limit,
        }
