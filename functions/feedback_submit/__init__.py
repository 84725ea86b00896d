"""Azure Functions HTTP trigger for feedback submissions.

Serverless entry point for the same handler the FastAPI app mounts at
``/api/feedback``. Each invocation builds its own GitHub client, so no state
is shared between requests.
"""

import json
import logging

import azure.functions as func

from feedback_api.handler import CORS_HEADERS, handle

logger = logging.getLogger(__name__)


def _read_json(req: func.HttpRequest) -> object:
    if not req.get_body():
        return None
    try:
        return req.get_json()
    except ValueError:
        logger.warning("Ignoring non-JSON feedback body")
        return None


async def main(req: func.HttpRequest) -> func.HttpResponse:
    logger.info("Feedback function triggered (%s)", req.method)

    payload = _read_json(req) if req.method.upper() == "POST" else None
    result = await handle(req.method, payload)

    if result.body is None:
        return func.HttpResponse(
            status_code=result.status_code, headers=dict(CORS_HEADERS)
        )
    return func.HttpResponse(
        json.dumps(result.body),
        status_code=result.status_code,
        mimetype="application/json",
        headers=dict(CORS_HEADERS),
    )
