import json
from typing import Any

import httpx

from solrstore.storage.search_store import SearchStore

SOLR_URL = "http://localhost:8983"

OK_HEADER = {"status": 0, "QTime": 1}


class SearchStoreProvider:
    SOLR = "solr"


def ok(**body: Any) -> dict[str, Any]:
    return {"responseHeader": OK_HEADER, **body}


class FakeSolr:
    """In memory Solr endpoint served through httpx.MockTransport.

    Routes are keyed by ``"METHOD /path"``; admin core routes add
    the ``action`` query parameter, e.g.
    ``"GET /solr/admin/cores?action=STATUS"``.
    """

    requests: list[httpx.Request]
    routes: dict[str, tuple[int, Any]]

    def __init__(self):
        self.requests = []
        self.routes = dict()

    def route(self, key: str, body: Any = None, status: int = 200) -> None:
        self.routes[key] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        action = request.url.params.get("action")
        if action:
            key = f"{key}?action={action}"
        if key not in self.routes:
            return httpx.Response(404, text=f"No route for {key}")
        status, body = self.routes[key]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def keys(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]

    def body(self, index: int = -1) -> Any:
        content = self.requests[index].content
        return json.loads(content) if content else None


def get_parameters(solr: FakeSolr, **kwargs: Any) -> dict[str, Any]:
    return {
        "url": SOLR_URL,
        "nparams": {"transport": solr.transport},
        **kwargs,
    }


provider_parameters: dict[str, Any] = {
    SearchStoreProvider.SOLR: get_parameters,
}


def get_component(
    provider_type: str,
    solr: FakeSolr,
    core: str | None = "test",
    **kwargs: Any,
) -> SearchStore:
    component = SearchStore(
        core=core,
        __provider__=dict(
            type=provider_type,
            parameters=provider_parameters[provider_type](solr, **kwargs),
        ),
    )
    return component
