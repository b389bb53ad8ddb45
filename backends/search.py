"""Zoekt webserver JSON API client."""

import logging
from http import HTTPStatus
from typing import Optional, Type, TypeVar

import requests
from pydantic import ValidationError

from backends.models import (
    ListRequest,
    ListResponse,
    RepoList,
    SearchRequest,
    SearchResponse,
    SearchResult,
    ZoektModel,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

ResponseT = TypeVar("ResponseT", bound=ZoektModel)


class ZoektError(Exception):
    """Base error for Zoekt requests. The message is meant for the tool caller."""


class ZoektUnavailableError(ZoektError):
    """The Zoekt webserver could not be reached."""


class ZoektStatusError(ZoektError):
    """Zoekt answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"Zoekt returned {status_code} {reason}: {body}")


class ZoektResponseError(ZoektError):
    """The response body did not match the expected shape."""


def _reason_phrase(response: requests.Response) -> str:
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return response.reason or ""


class ZoektSearchClient:
    """Zoekt search client implementation."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize Zoekt client.

        Args:
            base_url: Zoekt webserver base URL
            timeout: Connect and read timeout in seconds for each request
            session: Optional session to reuse; one is created when omitted
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(self, request: SearchRequest) -> SearchResult:
        """Run a query against ``/api/search``.

        Raises:
            ZoektError: If the request fails or the response cannot be parsed
        """
        return self._post("/api/search", request, SearchResponse).result

    def list_repos(self, request: ListRequest) -> RepoList:
        """List indexed repositories via ``/api/list``.

        Raises:
            ZoektError: If the request fails or the response cannot be parsed
        """
        return self._post("/api/list", request, ListResponse).repo_list

    def close(self) -> None:
        self.session.close()

    def _post(
        self, endpoint: str, body: ZoektModel, response_model: Type[ResponseT]
    ) -> ResponseT:
        url = f"{self.base_url}{endpoint}"
        payload = body.model_dump(by_alias=True, exclude_none=True)
        logger.debug(f"POST {url} {payload}")

        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            logger.warning(f"Zoekt request to {url} failed: {exc}")
            raise ZoektUnavailableError(f"Cannot reach {url}: {exc}") from exc

        if not 200 <= response.status_code < 300:
            logger.warning(f"Zoekt returned HTTP {response.status_code} for {url}")
            raise ZoektStatusError(response.status_code, _reason_phrase(response), response.text)

        try:
            return response_model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning(f"Unexpected Zoekt response from {url}: {exc}")
            raise ZoektResponseError(f"Failed to parse response: {exc}") from exc
