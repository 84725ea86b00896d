"""Feedback submission models."""

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_FIELDS = ["appName", "title", "body", "version"]


class FeedbackRequest(BaseModel):
    """Feedback posted by the mobile app. All fields are opaque strings."""

    model_config = ConfigDict(populate_by_name=True)

    app_name: str = Field(..., alias="appName", min_length=1)
    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)


class FeedbackResponse(BaseModel):
    """Response after a feedback issue has been created."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    issue_url: str = Field(..., alias="issueUrl")
    issue_number: int = Field(..., alias="issueNumber")
    message: str = "Feedback submitted successfully"
