"""Pydantic schemas for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from ...lib.database.models import UrlRecord


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The destination URL")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class UrlRecordResponse(BaseModel):
    """A stored URL record."""

    id: str = Field(..., description="Internal identifier")
    url: str = Field(..., description="The destination URL")
    shortened: str = Field(..., description="The short code")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "01927c5e-8d1a-7b3e-9f10-5c2d3e4f5a6b",
                    "url": "https://example.com/very/long/path",
                    "shortened": "3f2a9c1b7d4e",
                }
            ]
        }
    }

    @classmethod
    def from_record(cls, record: UrlRecord) -> "UrlRecordResponse":
        return cls(**record.to_dict())


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
