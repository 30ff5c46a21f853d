"""Shared request and response models for API endpoints.

This module contains the models used by more than one route module. Models
specific to a single route module live beside its handlers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SessionInfo(BaseModel):
    """Summary of a hosted terminal session.

    Attributes:
        session_id: Unique session identifier.
        prompt: Current shell prompt.
        current_directory: Current working directory.
        history_length: Number of recorded command lines.
        created_at: When the session was created.
    """

    session_id: str
    prompt: str
    current_directory: str
    history_length: int = Field(ge=0)
    created_at: datetime


class FilesystemEntry(BaseModel):
    """Metadata of one filesystem node.

    Attributes:
        name: Node name ("/" for the root).
        path: Absolute path of the node.
        kind: "file" or "directory".
        permissions: Ten-character permission string.
        owner: Owning user.
        group: Owning group.
        size: Size in bytes.
        modified_at: Last modification time.
    """

    name: str
    path: str
    kind: str
    permissions: str
    owner: str
    group: str
    size: int
    modified_at: datetime


class FilesystemNodeResponse(FilesystemEntry):
    """Metadata of a node plus, for directories, its immediate children.

    Attributes:
        children: Child entries sorted by name; None for files.
    """

    children: Optional[list[FilesystemEntry]] = None


class ErrorResponse(BaseModel):
    """Standard error response model.

    Attributes:
        error: Error type or code.
        detail: Human-readable error message.
    """

    error: str
    detail: str
