"""Feedback → GitHub issue service.

Checks the target repository, makes sure the ``feedback`` and version
labels exist, then files the issue. Label bookkeeping is best effort: a
failure there is logged and the issue is still created.
"""

import logging
from dataclasses import dataclass
from typing import Any

from feedback_api.config import Settings
from feedback_api.models.feedback import FeedbackRequest
from feedback_api.services.github import GitHubAPIError, GitHubClient

logger = logging.getLogger(__name__)

FEEDBACK_LABEL = "feedback"
FEEDBACK_LABEL_COLOR = "0052CC"
VERSION_LABEL_COLOR = "28A745"


class ConfigurationError(Exception):
    """Raised when the server is missing required configuration."""


class RepositoryNotFoundError(Exception):
    """Raised when the target repository does not exist."""

    def __init__(self, owner: str, repo: str) -> None:
        self.owner = owner
        self.repo = repo
        super().__init__(f"Repository {owner}/{repo} does not exist")


@dataclass(frozen=True, slots=True)
class LabelSpec:
    name: str
    color: str
    description: str


def label_spec_for(name: str) -> LabelSpec:
    """Return color and description for a label the flow may create."""
    if name == FEEDBACK_LABEL:
        return LabelSpec(
            name=name,
            color=FEEDBACK_LABEL_COLOR,
            description="User feedback from mobile app",
        )
    return LabelSpec(
        name=name, color=VERSION_LABEL_COLOR, description=f"Version {name}"
    )


def compose_issue_body(request: FeedbackRequest) -> str:
    return (
        f"{request.body}\n\n---\n"
        f"**App:** {request.app_name}\n"
        f"**Version:** {request.version}"
    )


async def check_repository_exists(client: GitHubClient, owner: str, repo: str) -> bool:
    """Return False if GitHub reports 404 for the repo; other errors propagate."""
    try:
        await client.get_repository(owner, repo)
    except GitHubAPIError as e:
        if e.is_not_found:
            return False
        raise
    return True


async def ensure_labels_exist(
    client: GitHubClient, owner: str, repo: str, label_names: list[str]
) -> None:
    """Create any of ``label_names`` missing from the repo.

    Lookup errors other than 404 and all creation errors are logged and
    skipped so that the issue can still be filed.
    """
    for name in label_names:
        try:
            await client.get_label(owner, repo, name)
            continue
        except GitHubAPIError as e:
            if not e.is_not_found:
                logger.error("Error checking label %s: %s", name, e)
                continue

        spec = label_spec_for(name)
        try:
            await client.create_label(
                owner, repo, spec.name, spec.color, spec.description
            )
            logger.info("Created label: %s", name)
        except GitHubAPIError as e:
            logger.error("Failed to create label %s: %s", name, e)


async def create_feedback_issue(
    request: FeedbackRequest, settings: Settings
) -> dict[str, Any]:
    """File ``request`` as a labeled issue in ``<owner>/<appName>``.

    Returns the GitHub issue dict with html_url and number.

    Raises:
        ConfigurationError: no GitHub token is configured.
        RepositoryNotFoundError: the repository does not exist.
        GitHubAPIError: any other GitHub failure.
    """
    if not settings.github_token:
        logger.error("GITHUB_TOKEN environment variable is not set")
        raise ConfigurationError("GITHUB_TOKEN is not set")

    owner = settings.github_owner
    repo = request.app_name
    labels = [FEEDBACK_LABEL, request.version]

    async with GitHubClient(settings) as client:
        if not await check_repository_exists(client, owner, repo):
            raise RepositoryNotFoundError(owner, repo)

        await ensure_labels_exist(client, owner, repo, labels)

        issue = await client.create_issue(
            owner,
            repo,
            title=request.title,
            body=compose_issue_body(request),
            labels=labels,
        )

    logger.info(
        "Created issue #%s in %s/%s: %s",
        issue.get("number"),
        owner,
        repo,
        request.title[:50],
    )
    return issue
