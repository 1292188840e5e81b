from typing import Any

import httpx

from ..core import log
from ..core.exceptions import RequestFailedError, RequestTimeoutError


class HttpTransport:
    """JSON over HTTP exchange with Solr.

    One request per call, no retries. Every non-success status
    is raised as ``RequestFailedError`` and an elapsed deadline
    as ``RequestTimeoutError``.
    """

    timeout: float | None
    auth: tuple[str, str] | None
    nparams: dict[str, Any]

    def __init__(
        self,
        timeout: float | None = 60,
        auth: tuple[str, str] | None = None,
        nparams: dict[str, Any] | None = None,
    ):
        """Initialize.

        Args:
            timeout:
                HTTP timeout. Defaults to 60 seconds.
            auth:
                Basic auth username and password.
            nparams:
                Native params to httpx client.
        """
        self.timeout = timeout
        self.auth = auth
        self.nparams = nparams or {}

    def get(self, url: str, body: Any = None) -> Any:
        return self._send("GET", url, body)

    def post(self, url: str, body: Any = None) -> Any:
        return self._send("POST", url, body)

    async def aget(self, url: str, body: Any = None) -> Any:
        return await self._asend("GET", url, body)

    async def apost(self, url: str, body: Any = None) -> Any:
        return await self._asend("POST", url, body)

    def _send(self, method: str, url: str, body: Any) -> Any:
        log.debug("%s %s", method, url)
        with httpx.Client(**self._get_client_params()) as client:
            try:
                response = client.request(
                    method,
                    url,
                    **self._get_request_params(body),
                )
            except httpx.TimeoutException as e:
                raise RequestTimeoutError(
                    f"Request to {url} timed out"
                ) from e
            except httpx.HTTPError as e:
                raise RequestFailedError(
                    f"Request to {url} failed: {e}"
                ) from e
            return self._handle_response(response)

    async def _asend(self, method: str, url: str, body: Any) -> Any:
        log.debug("%s %s", method, url)
        async with httpx.AsyncClient(**self._get_client_params()) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    **self._get_request_params(body),
                )
            except httpx.TimeoutException as e:
                raise RequestTimeoutError(
                    f"Request to {url} timed out"
                ) from e
            except httpx.HTTPError as e:
                raise RequestFailedError(
                    f"Request to {url} failed: {e}"
                ) from e
            return self._handle_response(response)

    def _get_client_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"timeout": self.timeout}
        if self.auth is not None:
            params["auth"] = self.auth
        params.update(self.nparams)
        return params

    def _get_request_params(self, body: Any) -> dict[str, Any]:
        params: dict[str, Any] = {
            "headers": {"Content-Type": "application/json"},
        }
        if body is not None:
            params["json"] = body
        return params

    def _handle_response(self, response: httpx.Response) -> Any:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self.handle_http_error(e.response) from e
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise RequestFailedError(
                f"Response from {response.request.url} is not JSON",
                status_code=response.status_code,
            ) from e

    def handle_http_error(self, response: httpx.Response) -> Exception:
        log.warn(
            "Request to %s failed with %s: %s",
            response.request.url,
            response.status_code,
            response.text,
        )
        return RequestFailedError(
            f"{response.status_code}: {response.text}",
            status_code=response.status_code,
        )
