"""Framework-neutral feedback submission handler.

``handle()`` takes the HTTP method and the decoded JSON body and returns a
``FeedbackResult`` (status code + JSON body). The FastAPI router and the
Azure Functions entry point both adapt it to their own response types.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from feedback_api.config import Settings, get_settings
from feedback_api.models.feedback import (
    REQUIRED_FIELDS,
    FeedbackRequest,
    FeedbackResponse,
)
from feedback_api.services.feedback import (
    ConfigurationError,
    RepositoryNotFoundError,
    create_feedback_issue,
)
from feedback_api.services.github import GitHubAPIError

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, "
        "Content-Length, Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}


@dataclass
class FeedbackResult:
    status_code: int
    body: dict[str, Any] | None = None


def _parse_request(payload: Any) -> FeedbackRequest | None:
    if not isinstance(payload, dict):
        return None
    try:
        return FeedbackRequest.model_validate(payload)
    except ValidationError:
        return None


def _error_result(exc: Exception) -> FeedbackResult:
    if isinstance(exc, RepositoryNotFoundError):
        return FeedbackResult(
            400, {"error": "Repository not found", "message": str(exc)}
        )
    if isinstance(exc, ConfigurationError):
        return FeedbackResult(500, {"error": "Server configuration error"})
    if isinstance(exc, GitHubAPIError):
        return FeedbackResult(
            exc.status_code or 500,
            {
                "error": "GitHub API error",
                "message": exc.message,
                "details": exc.details,
            },
        )
    return FeedbackResult(
        500,
        {"error": "Internal server error", "message": str(exc) or "Unknown error"},
    )


async def handle(
    method: str, payload: Any, settings: Settings | None = None
) -> FeedbackResult:
    """Handle one feedback request end to end."""
    method = method.upper()
    if method == "OPTIONS":
        return FeedbackResult(200)
    if method != "POST":
        return FeedbackResult(405, {"error": "Method not allowed"})

    request = _parse_request(payload)
    if request is None:
        return FeedbackResult(
            400,
            {"error": "Missing required parameters", "required": list(REQUIRED_FIELDS)},
        )

    settings = settings or get_settings()
    try:
        issue = await create_feedback_issue(request, settings)
        response = FeedbackResponse(
            issue_url=issue["html_url"], issue_number=issue["number"]
        )
    except ConfigurationError as e:
        return _error_result(e)
    except RepositoryNotFoundError as e:
        logger.warning("Feedback for unknown repository: %s", e)
        return _error_result(e)
    except Exception as e:
        logger.exception("Error creating GitHub issue")
        return _error_result(e)

    return FeedbackResult(201, response.model_dump(by_alias=True))
