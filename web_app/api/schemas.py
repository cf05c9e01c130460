"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from shortlink.database.models import URLMapping


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_code: str = Field(..., alias="shortCode", description="The short code")
    original_url: str = Field(..., alias="originalURL", description="The normalized original URL")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "shortCode": "3f9a0c1b",
                    "originalURL": "http://example.com",
                },
                {
                    "shortCode": "promo",
                    "originalURL": "http://example.com",
                },
            ]
        },
    }


class MappingResponse(BaseModel):
    """A stored mapping."""

    short_code: str = Field(..., alias="shortCode")
    original_url: str = Field(..., alias="originalURL")
    created_at: datetime = Field(..., alias="createdAt")
    expiration_date: Optional[datetime] = Field(None, alias="expirationDate")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_mapping(cls, mapping: URLMapping) -> "MappingResponse":
        return cls(
            short_code=mapping.short_code,
            original_url=mapping.original_url,
            created_at=mapping.created_at,
            expiration_date=mapping.expiration_date,
        )


class CheckResponse(BaseModel):
    """Result of an existence check by URL and/or alias."""

    exists: bool = Field(..., description="Whether a matching mapping exists")
    mapping: Optional[MappingResponse] = Field(None, description="The match, when one exists")


class DeleteRequest(BaseModel):
    """Request to delete a mapping. At least one field must be set."""

    url: Optional[str] = Field(None, description="Original URL, normalized before matching")
    short_code: Optional[str] = Field(None, alias="shortCode", description="Short code")

    model_config = {"populate_by_name": True}


class DeleteResponse(BaseModel):
    """Response after deleting a mapping."""

    message: str
    mapping: MappingResponse


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
