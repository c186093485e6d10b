"""GitHub API client for REST and GraphQL calls.

Requests are issued one at a time over a single session. There is no retry
or rate-limit backoff: every failure is raised as ``GitHubAPIError`` and the
caller decides whether it is fatal.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import requests

from .config import (
    API_BASE_URL,
    GRAPHQL_URL,
    REQUEST_TIMEOUT_SECONDS,
    token_from_env,
)

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100


class GitHubAPIError(Exception):
    pass


class GitHubClient:
    """Handles all communication with the GitHub REST and GraphQL APIs."""

    BASE_URL = API_BASE_URL

    def __init__(
        self,
        token: str,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        if not token:
            raise GitHubAPIError("GITHUB_TOKEN is required")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })

    @classmethod
    def from_env(cls, *, timeout: float = REQUEST_TIMEOUT_SECONDS) -> "GitHubClient":
        token = token_from_env()
        if not token:
            raise GitHubAPIError("GITHUB_TOKEN is required (GH_TOKEN is also accepted)")
        return cls(token, timeout=timeout)

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = f"{self.BASE_URL}{endpoint}" if endpoint.startswith("/") else endpoint
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise GitHubAPIError(f"Request to {url} failed: {e}") from e

        if response.status_code >= 400:
            raise GitHubAPIError(
                f"Received non-OK response {response.status_code} from {url}: {response.text[:500]}"
            )
        return response

    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(f"Error decoding response from {response.url}: {e}") from e

    def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        return self._json(self._request("GET", endpoint, params=params))

    def get_paginated(self, endpoint: str, params: Optional[dict] = None,
                      page_delay: float = 0.0) -> list:
        """Fetch every page of a list endpoint.

        Stops at the first page holding fewer than ``per_page`` items, so a
        listing of N items costs ceil(N / per_page) requests unless N is an
        exact multiple of the page size.
        """
        params = dict(params or {})
        params.setdefault("per_page", DEFAULT_PER_PAGE)
        per_page = params["per_page"]
        all_items: list = []

        page = 1
        while True:
            params["page"] = page
            items = self.get(endpoint, params=params)
            if not isinstance(items, list):
                raise GitHubAPIError(
                    f"Expected list for paginated endpoint {endpoint}, got {type(items).__name__}"
                )
            all_items.extend(items)
            if len(items) < per_page:
                break
            page += 1
            if page_delay:
                time.sleep(page_delay)

        return all_items

    def graphql(self, query: str, variables: Optional[dict] = None) -> dict:
        response = self._request(
            "POST", GRAPHQL_URL, json={"query": query, "variables": variables or {}}
        )
        payload = self._json(response)
        if not isinstance(payload, dict):
            raise GitHubAPIError(f"Unexpected GraphQL response: {payload!r}"[:500])
        if payload.get("errors"):
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in payload["errors"]
            )
            raise GitHubAPIError(f"GitHub GraphQL errors: {messages}")
        return payload.get("data") or {}
