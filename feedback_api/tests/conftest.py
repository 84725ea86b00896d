"""Shared fixtures for feedback-bridge tests."""

import json as json_lib
from typing import Any
from urllib.parse import quote, unquote

import httpx
import pytest

GITHUB_HOST = "api.github.com"


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset module-level singletons between tests."""
    yield

    from feedback_api.config import get_settings

    get_settings.cache_clear()


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from feedback_api.config import Settings, get_settings

    test_settings = Settings(
        github_token="test-token",
        github_owner="PawFighters",
        github_api_url="https://api.github.com",
        github_timeout=5.0,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("feedback_api.config.get_settings", lambda: test_settings)

    # Patch get_settings in modules that import it directly
    for mod_path in ["feedback_api.handler", "feedback_api.main"]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


class FakeGitHub:
    """In-memory stand-in for the GitHub repos/labels/issues endpoints.

    Served through ``httpx.MockTransport`` so requests go through the real
    GitHubClient URL building, encoding and redirect handling.
    """

    def __init__(self) -> None:
        self.repos: set[str] = set()
        self.labels: dict[str, dict[str, dict[str, Any]]] = {}
        self.issues: list[dict[str, Any]] = []
        self.calls: list[tuple[str, str, dict[str, Any] | None]] = []
        self.raw_paths: list[str] = []
        self._renamed: dict[str, str] = {}
        self._failures: dict[tuple[str, str], dict[str, Any]] = {}

    def add_repo(self, full_name: str, labels: tuple[str, ...] = ()) -> None:
        self.repos.add(full_name)
        self.labels[full_name] = {
            name: {"name": name, "color": "ededed", "description": ""}
            for name in labels
        }

    def rename_repo(self, old_name: str, new_name: str) -> None:
        """Answer requests for ``old_name`` with a redirect to ``new_name``."""
        self._renamed[old_name] = new_name

    def fail(
        self,
        method: str,
        path: str,
        status: int = 500,
        json: Any = None,
        text: str | None = None,
        exc: Exception | None = None,
    ) -> None:
        """Make ``method path`` fail with ``exc`` or an HTTP ``status``."""
        if json is None and text is None:
            json = {"message": "Server Error"}
        self._failures[(method, path)] = {
            "status": status,
            "json": json,
            "text": text,
            "exc": exc,
        }

    def calls_to(self, method: str, path: str) -> list[dict[str, Any] | None]:
        return [body for m, p, body in self.calls if m == method and p == path]

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        raw_path = request.url.raw_path.decode("ascii").split("?")[0]
        parts = [unquote(p) for p in raw_path.strip("/").split("/")]
        path = "/" + "/".join(parts)
        body = json_lib.loads(request.content) if request.content else None
        self.raw_paths.append(raw_path)
        self.calls.append((method, path, body))

        failure = self._failures.get((method, path))
        if failure is not None:
            if failure["exc"] is not None:
                raise failure["exc"]
            if failure["text"] is not None:
                return httpx.Response(failure["status"], text=failure["text"])
            return httpx.Response(failure["status"], json=failure["json"])

        not_found = httpx.Response(404, json={"message": "Not Found"})
        if len(parts) < 3 or parts[0] != "repos":
            return not_found
        full_name = f"{parts[1]}/{parts[2]}"

        if full_name in self._renamed:
            new_owner, new_repo = self._renamed[full_name].split("/")
            location = "/".join(
                ["", "repos", quote(new_owner, safe=""), quote(new_repo, safe="")]
                + [quote(p, safe="") for p in parts[3:]]
            )
            status = 301 if method == "GET" else 307
            return httpx.Response(
                status,
                headers={"Location": f"https://{GITHUB_HOST}{location}"},
                json={"message": "Moved Permanently", "url": location},
            )

        if full_name not in self.repos:
            return not_found

        rest = parts[3:]
        labels = self.labels[full_name]
        if method == "GET" and not rest:
            return httpx.Response(200, json={"full_name": full_name})
        if method == "GET" and len(rest) == 2 and rest[0] == "labels":
            label = labels.get(rest[1])
            return httpx.Response(200, json=label) if label else not_found
        if method == "POST" and rest == ["labels"]:
            if body["name"] in labels:
                return httpx.Response(422, json={"message": "Validation Failed"})
            labels[body["name"]] = dict(body)
            return httpx.Response(201, json=dict(body))
        if method == "POST" and rest == ["issues"]:
            number = len(self.issues) + 1
            issue = {
                **body,
                "number": number,
                "html_url": f"https://github.com/{full_name}/issues/{number}",
            }
            self.issues.append(issue)
            return httpx.Response(201, json=issue)
        return not_found


@pytest.fixture
def fake_github(monkeypatch) -> FakeGitHub:
    """Serve GitHub API calls from a FakeGitHub via httpx.MockTransport."""
    from feedback_api.services import http_client

    fake = FakeGitHub()
    transport = httpx.MockTransport(fake.handle_request)
    real_factory = http_client.new_github_http_client

    monkeypatch.setattr(
        "feedback_api.services.github.new_github_http_client",
        lambda settings: real_factory(settings, transport=transport),
    )
    return fake
