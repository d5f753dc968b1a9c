"""Common DTOs for API responses and error handling."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response model."""
    detail: str = Field(..., description="Error message describing what went wrong")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Health status", examples=["healthy"])


class RootResponse(BaseModel):
    """Root endpoint response model."""
    status: str = Field(..., description="API status", examples=["ok"])
    service: str = Field(..., description="Service name", examples=["jamboree-backend"])
    version: str = Field(..., description="API version", examples=["0.1.0"])
    event: str | None = Field(None, description="Event requested through ?event=<id>")


class DashboardResponse(BaseModel):
    user_id: str
    message: str = Field(..., examples=["Welcome to your dashboard!"])
    section: str | None = Field(None, description="Sub-path under /dashboard", examples=["settings"])
