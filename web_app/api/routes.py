"""API routes implementation."""

from typing import Optional

from fastapi import APIRouter, Form, Request, HTTPException, status
from pydantic import ValidationError as SchemaValidationError
from datetime import datetime, timezone

from .schemas import (
    ShortenResponse,
    CheckResponse,
    MappingResponse,
    DeleteRequest,
    DeleteResponse,
    HealthResponse,
    ErrorResponse,
)
from shortlink.common.logging_config import get_logger
from shortlink.errors import (
    ShortlinkError,
    ValidationError,
    ConflictError,
    NotFoundError,
)

router = APIRouter()
logger = get_logger("shortlink.web")


def http_error(error: ShortlinkError) -> HTTPException:
    """Map a domain error onto the HTTP status the boundary promises."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))

    logger.error(f"{error.error_code}: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal error",
    )


def internal_error(error: Exception, action: str) -> HTTPException:
    logger.exception(f"Unexpected error while {action}: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Error {action}",
    )


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing URL or malformed alias"},
        409: {"model": ErrorResponse, "description": "URL already shortened or alias in use"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Shorten a URL submitted as a form. Re-shortening a known URL returns its existing code.",
)
async def shorten_url(
    request: Request,
    url: str = Form(""),
    custom_alias: Optional[str] = Form(None),
):
    """Create a shortened URL."""
    service = request.app.state.service

    try:
        result = await service.shorten(url, custom_alias)
    except ShortlinkError as e:
        raise http_error(e)
    except Exception as e:
        raise internal_error(e, "saving URL mapping")

    return ShortenResponse(
        short_code=result["short_code"],
        original_url=result["original_url"],
    )


@router.get(
    "/check-url-or-alias",
    response_model=CheckResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Neither url nor custom_alias given"},
    },
    summary="Check URL or alias",
    description="Report whether a mapping exists for the given URL and/or alias (both must match when both are given).",
)
async def check_url_or_alias(
    request: Request,
    url: Optional[str] = None,
    custom_alias: Optional[str] = None,
):
    """Check if a given URL or custom alias exists."""
    service = request.app.state.service

    try:
        mapping = await service.lookup(short_code=custom_alias, original_url=url)
    except NotFoundError:
        return CheckResponse(exists=False)
    except ShortlinkError as e:
        raise http_error(e)
    except Exception as e:
        raise internal_error(e, "querying database")

    return CheckResponse(exists=True, mapping=MappingResponse.from_mapping(mapping))


@router.api_route(
    "/delete-url",
    methods=["POST", "DELETE"],
    response_model=DeleteResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid body or no identifier given"},
        404: {"model": ErrorResponse, "description": "No matching mapping"},
    },
    summary="Delete a mapping",
    description="Delete a mapping by original URL or short code, given as a JSON body.",
)
async def delete_url(request: Request):
    """Delete a URL mapping by its short code or original URL."""
    service = request.app.state.service

    try:
        payload = await request.json()
        body = DeleteRequest.model_validate(payload)
    except (ValueError, SchemaValidationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON data")

    try:
        mapping = await service.delete(short_code=body.short_code, original_url=body.url)
    except ShortlinkError as e:
        raise http_error(e)
    except Exception as e:
        raise internal_error(e, "deleting URL")

    return DeleteResponse(
        message="URL deleted successfully.",
        mapping=MappingResponse.from_mapping(mapping),
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
