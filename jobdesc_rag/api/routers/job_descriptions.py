import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from jobdesc_rag.api.dependencies import get_job_description_service
from jobdesc_rag.core.exceptions import JobDescriptionRAGError
from jobdesc_rag.models.job_models import (
    JobDescriptionPage,
    JobDescriptionSubmission,
    MessageResponse,
    SubmissionAcceptedResponse,
)
from jobdesc_rag.services.job_description_service import JobDescriptionService

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/jobdescription",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=SubmissionAcceptedResponse,
)
async def submit_job_description(
        request: Request,
        service: JobDescriptionService = Depends(get_job_description_service),
):
    """
    Accept a job description for asynchronous indexing.

    Returns as soon as the submission is on the queue.
    """
    body = await request.body()
    if not body or not body.strip():
        return _error(status.HTTP_400_BAD_REQUEST, "Request body is required")

    try:
        data = json.loads(body)
    except ValueError:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid JSON format")

    if not isinstance(data, dict):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid JSON format")

    try:
        submission = JobDescriptionSubmission.model_validate(data)
    except ValidationError as e:
        errors = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})

    try:
        message_id = service.submit(submission)
    except JobDescriptionRAGError:
        raise
    except Exception as e:
        logger.error(f"Error processing job description submission: {str(e)}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return SubmissionAcceptedResponse(id=message_id)


@router.get("/jobdescriptions", response_model=JobDescriptionPage)
def list_job_descriptions(
        page_number: Optional[str] = Query(None, alias="pageNumber"),
        page_size: Optional[str] = Query(None, alias="pageSize"),
        search: Optional[str] = Query(None),
        service: JobDescriptionService = Depends(get_job_description_service),
):
    """List indexed job descriptions, newest first, with optional free-text search."""
    try:
        return service.list_job_descriptions(page_number=page_number, page_size=page_size, search=search)
    except JobDescriptionRAGError:
        raise
    except Exception as e:
        logger.error(f"Error retrieving job descriptions: {str(e)}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@router.delete("/jobdescription/{document_id}", response_model=MessageResponse)
def delete_job_description(
        document_id: str,
        service: JobDescriptionService = Depends(get_job_description_service),
):
    try:
        service.delete(document_id)
    except JobDescriptionRAGError:
        raise
    except Exception as e:
        logger.error(f"Error deleting job description {document_id}: {str(e)}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return MessageResponse(message="Job description deleted successfully")
