"""Virtual terminal data models package.

This package contains the models for the simulated terminal: the virtual
filesystem and path resolver, the process table, the per-session state and
the fixed seed data every session starts from. The terminal host that drives
the command engine lives in models.terminal and is imported on its own.
"""

from models.filesystem import (
    DirectoryNotEmptyError,
    FileSystem,
    FileSystemError,
    FilesystemNode,
    InvalidMoveError,
    IsADirectoryFSError,
    NodeExistsError,
    NodeKind,
    NotADirectoryFSError,
    PathNotFoundError,
    canonical_path,
    resolve_path,
)
from models.process import ProcessRecord, ProcessTable
from models.session import SessionState

__all__ = [
    "DirectoryNotEmptyError",
    "FileSystem",
    "FileSystemError",
    "FilesystemNode",
    "InvalidMoveError",
    "IsADirectoryFSError",
    "NodeExistsError",
    "NodeKind",
    "NotADirectoryFSError",
    "PathNotFoundError",
    "ProcessRecord",
    "ProcessTable",
    "SessionState",
    "canonical_path",
    "resolve_path",
]
