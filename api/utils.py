"""Utility functions for API route handlers.

Helpers that turn terminal sessions and filesystem nodes into response
models, shared across the route modules.
"""

from fastapi import HTTPException

from api.models import FilesystemEntry, FilesystemNodeResponse, SessionInfo
from commands.arguments import resolve_arg
from models.filesystem import FilesystemNode, canonical_path, join_path
from models.terminal import TerminalSession


def session_info(terminal: TerminalSession) -> SessionInfo:
    """Build the summary model for a hosted session."""
    return SessionInfo(**terminal.summary())


def filesystem_entry(path: str, node: FilesystemNode) -> FilesystemEntry:
    """Build the metadata model for a node at an absolute path."""
    return FilesystemEntry(
        name=node.name,
        path=path,
        kind=node.kind.value,
        permissions=node.permissions,
        owner=node.owner,
        group=node.group,
        size=node.size,
        modified_at=node.modified_at,
    )


def get_node_or_404(terminal: TerminalSession, path: str) -> tuple[str, FilesystemNode]:
    """Resolve a path (with ~ expansion) against the session's working directory.

    Args:
        terminal: The hosted session.
        path: Absolute or relative path.

    Returns:
        Tuple of (absolute path, node).

    Raises:
        HTTPException: If nothing exists at the path (404).
    """
    absolute = canonical_path(resolve_arg(path, terminal.state))
    node = terminal.state.filesystem.lookup(absolute)
    if node is None:
        raise HTTPException(
            status_code=404,
            detail=f"No such file or directory: '{absolute}'",
        )
    return absolute, node


def node_response(path: str, node: FilesystemNode) -> FilesystemNodeResponse:
    """Build the response for a node, listing children for directories."""
    children = None
    if node.is_directory:
        children = [
            filesystem_entry(join_path(path, child.name), child)
            for child in node.sorted_children()
        ]
    return FilesystemNodeResponse(
        **filesystem_entry(path, node).model_dump(),
        children=children,
    )
