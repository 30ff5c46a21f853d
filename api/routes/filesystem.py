"""Virtual filesystem inspection endpoints.

Read-only views of a session's filesystem, for front-ends that render a file
tree next to the terminal. Mutations happen only through executed commands.
"""

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from api.dependencies import TerminalSessionDep
from api.models import FilesystemNodeResponse
from api.utils import get_node_or_404, node_response

router = APIRouter(
    prefix="/sessions/{session_id}/filesystem",
    tags=["filesystem"],
)


class FileContentResponse(BaseModel):
    """Content of a regular file.

    Args:
        path: Absolute path of the file.
        content: File text.
        size: Size in bytes.
    """

    path: str = Field(description="Absolute path of the file")
    content: str = Field(description="File text")
    size: int = Field(description="Size in bytes")


@router.get("", response_model=FilesystemNodeResponse)
async def get_node(
    terminal: TerminalSessionDep,
    path: str = Query(default=".", description="Path relative to the working directory"),
):
    """Get metadata for a node, with its children if it is a directory.

    Raises:
        HTTPException: If nothing exists at the path (404).
    """
    absolute, node = get_node_or_404(terminal, path)
    return node_response(absolute, node)


@router.get("/content", response_model=FileContentResponse)
async def get_file_content(
    terminal: TerminalSessionDep,
    path: str = Query(description="Path of the file to read"),
):
    """Get the content of a regular file.

    Raises:
        HTTPException: If nothing exists at the path (404) or it is a
            directory (400).
    """
    absolute, node = get_node_or_404(terminal, path)
    if node.is_directory:
        raise HTTPException(
            status_code=400,
            detail=f"Is a directory: '{absolute}'",
        )
    return FileContentResponse(path=absolute, content=node.content, size=node.size)
