"""API routes for comment preparation endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..models import MinifyRequest, MinifyResponse, PrepareRequest, PrepareResponse
from ..services import (
    SUPPORTED_SERVICE_TYPES,
    dispatch_json,
    estimate_reduction,
    minify_text,
    minify_threads,
    prepare_json_for_analysis,
)

logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(prefix=settings.api_prefix, tags=["preparation"])


def _check_service_type(service_type: str) -> None:
    if service_type.lower() not in SUPPORTED_SERVICE_TYPES:
        raise ValueError(
            f"service_type must be one of {', '.join(SUPPORTED_SERVICE_TYPES)}, got: {service_type}"
        )


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "comment-preparation"}


@router.post("/prepare", response_model=PrepareResponse)
async def prepare_comments(request: PrepareRequest):
    """
    Prepare raw platform JSON for AI analysis.

    Returns compact markdown-like text including:
    - One section per thread with its title and body
    - Comments in source order, replies indented under their parent
    - A truncation note when the comment limit was reached

    Content that cannot be parsed for the given service type is returned
    unchanged with a comment count of zero.
    """
    try:
        logger.info(f"Processing prepare request for service type: {request.service_type}")

        _check_service_type(request.service_type)

        prepared = prepare_json_for_analysis(
            request.content,
            request.service_type,
            max_comments=request.max_comments,
            use_slimmed_format=request.use_slimmed_format,
        )
        estimate = estimate_reduction(request.content, prepared.text)

        return PrepareResponse(
            text=prepared.text,
            comment_count=prepared.comment_count,
            original_bytes=estimate.original_bytes,
            prepared_bytes=estimate.prepared_bytes,
            reduction_percent=estimate.reduction_percent,
        )

    except ValueError as e:
        logger.error(f"Invalid parameter for {request.service_type}: {str(e)}")
        raise HTTPException(status_code=400, detail=f"Invalid parameter: {str(e)}")

    except Exception as e:
        logger.error(f"Unexpected error preparing {request.service_type} content: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail="Internal server error occurred while processing request",
        )


@router.post("/minify", response_model=MinifyResponse)
async def minify_content(request: MinifyRequest):
    """
    Convert raw platform JSON to minified threads.

    Threads are returned with short keys (t, d, a, c, p, co for threads and
    a, c, t, s, r for comments) together with their full text rendering.
    """
    try:
        logger.info(f"Processing minify request for service type: {request.service_type}")

        _check_service_type(request.service_type)

        threads = minify_threads(dispatch_json(request.content, request.service_type, for_analysis=True))

        return MinifyResponse(threads=threads, text=minify_text(threads))

    except ValueError as e:
        logger.error(f"Invalid parameter for {request.service_type}: {str(e)}")
        raise HTTPException(status_code=400, detail=f"Invalid parameter: {str(e)}")

    except Exception as e:
        logger.error(f"Unexpected error minifying {request.service_type} content: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail="Internal server error occurred while processing request",
        )
