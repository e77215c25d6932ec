"""
Suggest Tool Endpoint - Receives "Suggest a Tool" form submissions.

The form posts multipart/form-data with title, url, description, tag,
an optional repo URL and an optional logo image. A successful submission
opens a pull request against the content repository.
"""

import logging

from fastapi import APIRouter, Depends, Request

from makerbench.core.dependencies import get_multipart_config, get_submission_service
from makerbench.models.responses import ErrorResponse, SubmissionResponse
from makerbench.services.multipart import MultipartConfig, decode_multipart
from makerbench.services.submission_service import SubmissionService


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Suggestions"])


def _is_base64_body(request: Request) -> bool:
    """Serverless gateways mark base64-wrapped bodies with this header."""
    encoding = request.headers.get("content-transfer-encoding", "")
    return encoding.strip().lower() == "base64"


@router.post(
    "/suggest-tool",
    response_model=SubmissionResponse,
    summary="Suggest a Tool",
    description="Submit a tool for the directory; opens a pull request on GitHub",
    responses={
        200: {"description": "Pull request opened"},
        400: {"model": ErrorResponse, "description": "Malformed body or missing required fields"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        409: {"model": ErrorResponse, "description": "Tool directory changed, retry"},
        500: {"model": ErrorResponse, "description": "Submission failed"}
    }
)
async def suggest_tool(
    request: Request,
    service: SubmissionService = Depends(get_submission_service),
    multipart_config: MultipartConfig = Depends(get_multipart_config)
) -> SubmissionResponse:
    """
    Handle a tool suggestion.

    This endpoint:
    1. Decodes the multipart body (staging the logo in scratch space)
    2. Validates the fields
    3. Commits the logo and updated tools.json to a new branch
    4. Opens a pull request

    The staged logo is removed whether or not the submission succeeds.
    """
    body = await request.body()
    fields = decode_multipart(
        body,
        is_base64_encoded=_is_base64_body(request),
        content_type=request.headers.get("content-type"),
        config=multipart_config
    )

    try:
        result = await service.submit(fields)
    finally:
        fields.discard_files()

    return SubmissionResponse(
        message="Tool suggestion submitted successfully",
        pull_request_url=result.pull_request_url
    )
