"""HTTP client utilities for talking to the GitHub REST API."""

import httpx

from feedback_api.config import Settings

USER_AGENT = "feedback-bridge"


def github_headers(token: str | None) -> dict[str, str]:
    """Build standard GitHub API request headers.

    Includes the Authorization header only when a token is given.
    """
    headers: dict[str, str] = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def new_github_http_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Return a fresh httpx.AsyncClient bound to the GitHub API.

    A new client is built for every submission; callers own it and must
    close it (``async with`` does this). Redirects are followed so that
    renamed repositories (301/307) resolve to their new location.
    """
    return httpx.AsyncClient(
        base_url=settings.github_api_url,
        headers=github_headers(settings.github_token),
        timeout=settings.github_timeout,
        follow_redirects=True,
        transport=transport,
    )
