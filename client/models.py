"""Client response models for the terminal simulator API client.

This module re-exports the shared models of the API layer and defines the
client-specific models for endpoints that have no shared model there.
"""

from pydantic import BaseModel, Field

from api.models import ErrorResponse, FilesystemEntry, FilesystemNodeResponse, SessionInfo

__all__ = [
    # Re-exported from api.models
    "ErrorResponse",
    "FilesystemEntry",
    "FilesystemNodeResponse",
    "SessionInfo",
    # Client-specific models
    "HealthResponse",
    "ServiceInfoResponse",
]


class HealthResponse(BaseModel):
    """Response model for the health check.

    Attributes:
        status: Health status ("healthy" when the service is up).
    """

    status: str = Field(..., description="Health status")


class ServiceInfoResponse(BaseModel):
    """Response model for the root endpoint.

    Attributes:
        message: Welcome message.
        version: API version string.
        docs_url: Path of the interactive API docs.
    """

    message: str
    version: str
    docs_url: str
