"""HTTP client for the commerce API (OAuth client credentials, JSON resources)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from catalogsync.adapters.http_resilience import ResilientClient
from catalogsync.domain.errors import RemoteServiceError

from .schema import ErrorResponse, UpdateRequest

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from catalogsync.config.commerce import CommerceConfig
    from catalogsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

QUERY_PAGE_LIMIT = 500

type QueryParam = str | list[str]


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def key_in_predicate(keys: Iterable[str]) -> str:
    """Query predicate matching any of ``keys`` (keys quoted as JSON strings)."""
    quoted = ", ".join(json.dumps(key) for key in sorted(keys))
    return f"key in ({quoted})"


class CommerceAPIError(RemoteServiceError):
    """Raised when the commerce API answers with an error status."""


@dataclass(slots=True)
class CommerceClient:
    """Thin resource-oriented wrapper around :class:`ResilientClient`.

    Use as an async context manager; the access token is fetched lazily and reused.
    """

    config: CommerceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)
    _token: str | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> CommerceClient:
        self._client = self.client_factory(self.config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def http(self) -> ResilientClient:
        if self._client is None:
            raise RuntimeError("CommerceClient must be used as an async context manager")
        return self._client

    async def query(
        self, resource: str, *, where: str, **params: QueryParam
    ) -> list[dict[str, Any]]:
        """Return every result of a query, following offset pagination."""
        results: list[dict[str, Any]] = []
        offset = 0
        while True:
            payload = await self._request(
                "GET",
                f"/{resource}",
                params={
                    "where": where,
                    "limit": str(QUERY_PAGE_LIMIT),
                    "offset": str(offset),
                    "withTotal": "false",
                    **params,
                },
            )
            page: list[dict[str, Any]] = payload.get("results", [])
            results.extend(page)
            if len(page) < QUERY_PAGE_LIMIT:
                return results
            offset += len(page)

    async def get_by_key(
        self, resource: str, key: str, **params: QueryParam
    ) -> dict[str, Any] | None:
        try:
            return await self._request(
                "GET", f"/{resource}/key={quote(key, safe='')}", params=params or None
            )
        except CommerceAPIError as exc:
            if exc.status_code == httpx.codes.NOT_FOUND:
                return None
            raise

    async def create(self, resource: str, body: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/{resource}", body=body)

    async def update(
        self,
        resource: str,
        resource_id: str,
        *,
        version: int,
        actions: list[dict[str, Any]],
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/{resource}/{resource_id}",
            body=UpdateRequest(version=version, actions=actions).to_wire(),
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, QueryParam] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        token = await self._access_token()
        response = await self.http.request(
            method,
            path,
            params=params,
            json=body,
            headers={"Authorization": f"Bearer {token}"},
        )
        if response.is_error:
            raise _api_error(response)
        payload = response.json()
        if not isinstance(payload, dict):
            raise CommerceAPIError(
                f"Unexpected commerce API response for {method} {path}",
                status_code=response.status_code,
            )
        return payload

    async def _access_token(self) -> str:
        if self._token is not None:
            return self._token
        response = await self.http.post(
            f"{self.config.auth_url}/oauth/token",
            data={"grant_type": "client_credentials", "scope": " ".join(self.config.scopes)},
            auth=(self.config.client_id, self.config.client_secret),
        )
        if response.is_error:
            raise _api_error(response)
        token = response.json().get("access_token")
        if not isinstance(token, str):
            raise CommerceAPIError("Token response carries no access_token")
        self._token = token
        log.debug("Obtained commerce API access token for project %s", self.config.project_key)
        return token


def _api_error(response: httpx.Response) -> CommerceAPIError:
    try:
        error = ErrorResponse.model_validate(response.json())
    except ValueError:
        message = response.text or response.reason_phrase
    else:
        message = error.message
    log.debug("Commerce API error %s: %s", response.status_code, message)
    return CommerceAPIError(message, status_code=response.status_code)


__all__ = ["QUERY_PAGE_LIMIT", "CommerceAPIError", "CommerceClient", "key_in_predicate"]
