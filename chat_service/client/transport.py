"""HTTP transport for executing request definitions against the GraphQL endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from chat_service.client.documents import RequestDefinition
    from chat_service.client.fragments import FragmentLibrary

logger = logging.getLogger(__name__)


class GraphQLRequestError(Exception):
    """The endpoint answered with an HTTP error or a GraphQL ``errors`` list."""

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        status_code: int | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []
        self.status_code = status_code
        self.data = data

    @property
    def codes(self) -> list[str | None]:
        """``extensions.code`` of each GraphQL error."""
        return [error.get("extensions", {}).get("code") for error in self.errors]


class ChatClient:
    """Async client that sends catalog requests over HTTP.

    Example:
        ```python
        async with ChatClient("http://localhost:8000") as client:
            data = await client.execute(GROUP_QUERY, {"groupId": 1})
        ```
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        path: str = "/graphql",
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        library: FragmentLibrary | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Server base URL.
            path: GraphQL endpoint path.
            timeout: Request timeout in seconds.
            headers: Default headers for every request.
            library: Fragment library used to render documents.
            client: Pre-built httpx client (e.g. bound to an ASGI transport).
        """
        self.path = path
        self.library = library
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers or {},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> ChatClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def build_payload(
        self,
        request: RequestDefinition,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """JSON body for ``request``; structured variables stay nested objects."""
        return {
            "query": request.render(self.library),
            "variables": variables or {},
            "operationName": request.name,
        }

    async def execute(
        self,
        request: RequestDefinition,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send ``request`` and return its ``data``.

        Raises:
            GraphQLRequestError: On a non-2xx response, a response with errors,
                or a response without a ``data`` object.
        """
        if request.operation == "subscription":
            msg = f"{request.name} is a subscription; use a WebSocket client"
            raise ValueError(msg)

        payload = self.build_payload(request, variables)
        logger.debug("GraphQL request", extra={"operation": request.name})

        try:
            response = await self.client.post(self.path, json=payload)
        except httpx.HTTPError as e:
            raise GraphQLRequestError(f"{request.name} failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        errors = body.get("errors") or []
        if response.is_error or errors:
            logger.info(
                "GraphQL request failed",
                extra={"operation": request.name, "status_code": response.status_code},
            )
            message = errors[0].get("message") if errors else response.reason_phrase
            raise GraphQLRequestError(
                f"{request.name} failed: {message}",
                errors=errors,
                status_code=response.status_code,
                data=body.get("data"),
            )

        data = body.get("data")
        if not isinstance(data, dict):
            raise GraphQLRequestError(
                f"{request.name} failed: response has no data",
                status_code=response.status_code,
            )
        return data


__all__ = ["ChatClient", "GraphQLRequestError"]
