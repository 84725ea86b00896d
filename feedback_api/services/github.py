"""Minimal async GitHub REST client for repositories, labels and issues.

Only the handful of endpoints the feedback flow needs are wrapped. Every
non-2xx response (and every transport failure) is raised as
``GitHubAPIError`` so callers can branch on ``status_code``; 404 in
particular is how "not found" is signalled.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from feedback_api.config import Settings
from feedback_api.services.http_client import new_github_http_client

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when a GitHub API call fails."""

    def __init__(
        self, status_code: int | None, message: str, details: Any = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def _error_from_response(resp: httpx.Response) -> GitHubAPIError:
    try:
        details: Any = resp.json()
    except ValueError:
        details = resp.text or None

    message = ""
    if isinstance(details, dict):
        message = str(details.get("message") or "")
    if not message:
        message = resp.reason_phrase or f"GitHub API returned {resp.status_code}"
    return GitHubAPIError(resp.status_code, message, details)


def _segment(value: str) -> str:
    """Percent-encode ``value`` as exactly one URL path segment."""
    # Dot segments would otherwise be collapsed by URL normalisation
    if value in (".", ".."):
        return value.replace(".", "%2E")
    return quote(value, safe="")


def _repo_path(owner: str, repo: str) -> str:
    return f"/repos/{_segment(owner)}/{_segment(repo)}"


class GitHubClient:
    """Per-request GitHub client. Use as an async context manager."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GitHubClient":
        self._http = new_github_http_client(self._settings)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> Any:
        if self._http is None:
            raise RuntimeError("GitHubClient used outside of 'async with'")

        try:
            if method == "GET":
                resp = await self._http.get(path)
            else:
                resp = await self._http.post(path, json=json)
        except httpx.HTTPError as e:
            logger.error("GitHub request %s %s failed: %s", method, path, e)
            raise GitHubAPIError(None, str(e) or type(e).__name__) from e

        # Redirects (renamed repos) are followed; anything else non-2xx fails
        if not resp.is_success:
            raise _error_from_response(resp)
        try:
            return resp.json()
        except ValueError as e:
            raise GitHubAPIError(
                resp.status_code, "GitHub returned a non-JSON response", resp.text
            ) from e

    async def get_repository(self, owner: str, repo: str) -> dict[str, Any]:
        return await self._request("GET", _repo_path(owner, repo))

    async def get_label(self, owner: str, repo: str, name: str) -> dict[str, Any]:
        return await self._request(
            "GET", f"{_repo_path(owner, repo)}/labels/{_segment(name)}"
        )

    async def create_label(
        self, owner: str, repo: str, name: str, color: str, description: str
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"{_repo_path(owner, repo)}/labels",
            json={"name": name, "color": color, "description": description},
        )

    async def create_issue(
        self, owner: str, repo: str, title: str, body: str, labels: list[str]
    ) -> dict[str, Any]:
        """Create an issue. Returns the GitHub issue dict (html_url, number, ...)."""
        return await self._request(
            "POST",
            f"{_repo_path(owner, repo)}/issues",
            json={"title": title, "body": body, "labels": labels},
        )
