"""Feedback submission endpoint."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from feedback_api.handler import handle

router = APIRouter(prefix="/feedback", tags=["feedback"])
logger = logging.getLogger(__name__)

ACCEPTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def _read_json(request: Request) -> Any:
    """Decode the request body, or None when it is empty or not JSON."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Ignoring non-JSON feedback body (%d bytes)", len(raw))
        return None


@router.api_route("", methods=ACCEPTED_METHODS)
async def feedback(request: Request) -> Response:
    """Create a GitHub issue from mobile app feedback (POST only)."""
    payload = await _read_json(request) if request.method == "POST" else None
    result = await handle(request.method, payload)

    if result.body is None:
        return Response(status_code=result.status_code)
    return JSONResponse(content=result.body, status_code=result.status_code)
