"""Virtual filesystem models.

This module contains the node model for the simulated POSIX-like filesystem,
the path resolution helpers, and the FileSystem node store that owns the tree.

Paths handled here are plain strings. Relative paths are turned into absolute
ones by resolve_path(); the FileSystem itself only ever deals with absolute
paths and normalizes "." and ".." segments while descending.
"""

from datetime import datetime
from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, Field, model_validator

DIRECTORY_SIZE = 4096


class NodeKind(str, Enum):
    """Kind of a filesystem node."""

    FILE = "file"
    DIRECTORY = "directory"


# Exceptions


class FileSystemError(Exception):
    """Base class for node store failures.

    Each subclass carries the coreutils error text (strerror) so that command
    handlers can build messages such as "rm: cannot remove 'x': Is a directory".

    Args:
        path: The path the operation failed on.
    """

    strerror = "Input/output error"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path}: {self.strerror}")


class PathNotFoundError(FileSystemError):
    """Raised when a path (or one of its parents) does not exist."""

    strerror = "No such file or directory"


class NotADirectoryFSError(FileSystemError):
    """Raised when a directory was expected but a file was found."""

    strerror = "Not a directory"


class IsADirectoryFSError(FileSystemError):
    """Raised when a file was expected but a directory was found."""

    strerror = "Is a directory"


class NodeExistsError(FileSystemError):
    """Raised when inserting a name that already exists."""

    strerror = "File exists"


class DirectoryNotEmptyError(FileSystemError):
    """Raised when removing a non-empty directory without recursion."""

    strerror = "Directory not empty"


class InvalidMoveError(FileSystemError):
    """Raised when moving a directory into its own subtree, or moving the root."""

    strerror = "Invalid argument"


# Path resolution


def resolve_path(path: str, current_directory: str) -> str:
    """Turn a path into an absolute path relative to the current directory.

    Absolute paths are returned unchanged. Relative paths are applied segment
    by segment on top of current_directory: ".." pops the last segment (a
    no-op at the root), "." is dropped, anything else is pushed.

    No existence check is performed; the node store decides whether the
    result exists.

    Args:
        path: Path as typed by the user.
        current_directory: Absolute path of the current directory.

    Returns:
        An absolute path string. The root resolves to "/".

    Example:
        >>> resolve_path("../etc", "/home")
        '/etc'
        >>> resolve_path("..", "/")
        '/'
    """
    if path.startswith("/"):
        return path

    segments = [part for part in current_directory.split("/") if part]
    for part in path.split("/"):
        if not part or part == ".":
            continue
        if part == "..":
            if segments:
                segments.pop()
        else:
            segments.append(part)

    return "/" + "/".join(segments)


def split_path(path: str) -> list[str]:
    """Split an absolute path into its logical segments.

    Empty and "." segments are dropped and ".." pops the previous segment,
    so "/home//user/../user/." yields ["home", "user"].

    Args:
        path: An absolute path.

    Returns:
        List of segment names from the root downwards.
    """
    segments: list[str] = []
    for part in path.split("/"):
        if not part or part == ".":
            continue
        if part == "..":
            if segments:
                segments.pop()
        else:
            segments.append(part)
    return segments


def canonical_path(path: str) -> str:
    """Return the normalized form of an absolute path."""
    return "/" + "/".join(split_path(path))


def join_path(parent: str, name: str) -> str:
    """Join a directory path and a child name without doubling slashes."""
    if parent.endswith("/"):
        return parent + name
    return f"{parent}/{name}"


# Nodes


class FilesystemNode(BaseModel):
    """A single entry in the virtual filesystem tree.

    A node is either a file (with content) or a directory (with children),
    never both. Permissions, owner and group are cosmetic; they are shown by
    ls/stat and mutated by chmod/chown but never enforced.

    Args:
        name: Segment name (no slashes). The root is named "/".
        kind: Whether this node is a file or a directory.
        content: Text payload, files only.
        children: Mapping of child name to child node, directories only.
        permissions: 10-character permission string (e.g. "drwxr-xr-x").
        owner: Owning user name.
        group: Owning group name.
        size: Size in bytes. Set at creation, not recomputed on mutation.
        modified_at: Last modification time.
    """

    name: str = Field(description="Segment name (no slashes)")
    kind: NodeKind = Field(description="File or directory")
    content: Optional[str] = Field(default=None, description="File payload")
    children: Optional[dict[str, "FilesystemNode"]] = Field(
        default=None, description="Child nodes keyed by name"
    )
    permissions: str = Field(
        description="POSIX-style permission string",
        pattern=r"^[-dl][rwxsStT-]{9}$",
    )
    owner: str = Field(default="user", description="Owning user")
    group: str = Field(default="user", description="Owning group")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    modified_at: datetime = Field(description="Last modification time")

    @model_validator(mode="after")
    def validate_kind_payload(self) -> "FilesystemNode":
        """Ensure the payload matches the node kind.

        Raises:
            ValueError: If a file has children or a directory has content.
        """
        if self.kind == NodeKind.DIRECTORY:
            if self.content is not None:
                raise ValueError(f"Directory '{self.name}' cannot have content")
            if self.children is None:
                self.children = {}
        else:
            if self.children is not None:
                raise ValueError(f"File '{self.name}' cannot have children")
            if self.content is None:
                self.content = ""
        if self.name != "/" and "/" in self.name:
            raise ValueError(f"Node name cannot contain '/': {self.name!r}")
        return self

    @classmethod
    def new_file(
        cls,
        name: str,
        modified_at: datetime,
        content: str = "",
        permissions: str = "-rw-r--r--",
        owner: str = "user",
        group: str = "user",
    ) -> "FilesystemNode":
        """Create a file node, sizing it from its content.

        Args:
            name: File name.
            modified_at: Creation time.
            content: Initial text payload.
            permissions: Permission string.
            owner: Owning user.
            group: Owning group.

        Returns:
            The new file node.
        """
        return cls(
            name=name,
            kind=NodeKind.FILE,
            content=content,
            permissions=permissions,
            owner=owner,
            group=group,
            size=len(content.encode("utf-8")),
            modified_at=modified_at,
        )

    @classmethod
    def new_directory(
        cls,
        name: str,
        modified_at: datetime,
        children: Optional[dict[str, "FilesystemNode"]] = None,
        permissions: str = "drwxr-xr-x",
        owner: str = "user",
        group: str = "user",
    ) -> "FilesystemNode":
        """Create a directory node.

        Args:
            name: Directory name.
            modified_at: Creation time.
            children: Optional initial children.
            permissions: Permission string.
            owner: Owning user.
            group: Owning group.

        Returns:
            The new directory node.
        """
        return cls(
            name=name,
            kind=NodeKind.DIRECTORY,
            children=children or {},
            permissions=permissions,
            owner=owner,
            group=group,
            size=DIRECTORY_SIZE,
            modified_at=modified_at,
        )

    @property
    def is_directory(self) -> bool:
        return self.kind == NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind == NodeKind.FILE

    def sorted_children(self, include_hidden: bool = True) -> list["FilesystemNode"]:
        """Return children ordered the way ls orders them.

        Names are compared case-insensitively with leading dots ignored,
        which matches ls under an en_US locale.

        Args:
            include_hidden: Whether to include dot-files.

        Returns:
            Ordered list of child nodes (empty for files).
        """
        if not self.children:
            return []
        entries = [
            child
            for child in self.children.values()
            if include_hidden or not child.name.startswith(".")
        ]
        return sorted(entries, key=lambda child: (child.name.lstrip(".").lower(), child.name))

    def total_size(self) -> int:
        """Return the size of this node plus everything beneath it."""
        total = self.size
        for child in (self.children or {}).values():
            total += child.total_size()
        return total

    def to_dict(self, include_children: bool = True) -> dict:
        """Convert node to dictionary for API responses.

        Args:
            include_children: Whether to list child names for directories.

        Returns:
            Dictionary representation of this node (content excluded).
        """
        result = {
            "name": self.name,
            "kind": self.kind.value,
            "permissions": self.permissions,
            "owner": self.owner,
            "group": self.group,
            "size": self.size,
            "modified_at": self.modified_at.isoformat(),
        }
        if self.is_directory and include_children:
            result["children"] = [child.name for child in self.sorted_children()]
        return result


FilesystemNode.model_rebuild()


# Node store


class FileSystem(BaseModel):
    """Owned tree of filesystem nodes rooted at "/".

    This is the node store the command handlers operate on. Lookups return
    None for missing paths; mutations raise FileSystemError subclasses so the
    caller can decide how to word the failure.

    Args:
        root: The root directory node.
    """

    root: FilesystemNode = Field(description="Root directory node")

    @model_validator(mode="after")
    def validate_root(self) -> "FileSystem":
        """Ensure the root is a directory named "/"."""
        if not self.root.is_directory:
            raise ValueError("Filesystem root must be a directory")
        if self.root.name != "/":
            raise ValueError("Filesystem root must be named '/'")
        return self

    def lookup(self, path: str) -> Optional[FilesystemNode]:
        """Find the node at an absolute path.

        Args:
            path: Absolute path.

        Returns:
            The node, or None if any segment is missing or an intermediate
            node is a file.
        """
        current = self.root
        for part in split_path(path):
            if not current.is_directory or part not in current.children:
                return None
            current = current.children[part]
        return current

    def exists(self, path: str) -> bool:
        return self.lookup(path) is not None

    def require(self, path: str) -> FilesystemNode:
        """Find the node at path or raise.

        Raises:
            PathNotFoundError: If the path does not exist.
        """
        node = self.lookup(path)
        if node is None:
            raise PathNotFoundError(path)
        return node

    def require_directory(self, path: str) -> FilesystemNode:
        """Find the directory at path or raise.

        Raises:
            PathNotFoundError: If the path does not exist.
            NotADirectoryFSError: If the path is a file.
        """
        node = self.require(path)
        if not node.is_directory:
            raise NotADirectoryFSError(path)
        return node

    @staticmethod
    def parent_and_name(path: str) -> tuple[str, str]:
        """Split an absolute path into (parent path, final segment).

        The root has no name; ("/", "") is returned for it.
        """
        segments = split_path(path)
        if not segments:
            return "/", ""
        return "/" + "/".join(segments[:-1]), segments[-1]

    def insert(
        self,
        parent_path: str,
        name: str,
        node: FilesystemNode,
        overwrite: bool = False,
    ) -> FilesystemNode:
        """Attach node under the directory at parent_path.

        The node is renamed to name if necessary.

        Args:
            parent_path: Absolute path of the parent directory.
            name: Child name to insert under.
            node: The node to attach (taken over, not copied).
            overwrite: Replace an existing child of the same name.

        Returns:
            The inserted node.

        Raises:
            PathNotFoundError: If the parent does not exist.
            NotADirectoryFSError: If the parent is a file.
            NodeExistsError: If the name exists and overwrite is False.
        """
        parent = self.require_directory(parent_path)
        if name in parent.children and not overwrite:
            raise NodeExistsError(join_path(canonical_path(parent_path), name))
        if node.name != name:
            node.name = name
        parent.children[name] = node
        return node

    def remove(self, parent_path: str, name: str, recursive: bool = False) -> FilesystemNode:
        """Detach and return the child called name from parent_path.

        Args:
            parent_path: Absolute path of the parent directory.
            name: Child to remove.
            recursive: Allow removing a non-empty directory.

        Returns:
            The removed node.

        Raises:
            PathNotFoundError: If the parent or the child does not exist.
            NotADirectoryFSError: If the parent is a file.
            DirectoryNotEmptyError: If the child is a non-empty directory and
                recursive is False.
        """
        parent = self.require_directory(parent_path)
        child_path = join_path(canonical_path(parent_path), name)
        child = parent.children.get(name)
        if child is None:
            raise PathNotFoundError(child_path)
        if child.is_directory and child.children and not recursive:
            raise DirectoryNotEmptyError(child_path)
        del parent.children[name]
        return child

    def move(self, source_path: str, dest_path: str, now: datetime) -> FilesystemNode:
        """Move the node at source_path to dest_path.

        The destination is the full new path of the node; an existing node
        there is replaced. Metadata is preserved except name and modified_at.

        Args:
            source_path: Absolute path of the node to move.
            dest_path: Absolute path the node should end up at.
            now: Timestamp to record as modified_at.

        Returns:
            The moved node.

        Raises:
            PathNotFoundError: If the source or the destination parent is missing.
            NotADirectoryFSError: If the destination parent is a file.
            InvalidMoveError: If moving the root or a directory into itself.
        """
        source = canonical_path(source_path)
        dest = canonical_path(dest_path)
        if source == "/":
            raise InvalidMoveError(source)
        if dest == source:
            return self.require(source)
        if dest.startswith(source + "/"):
            raise InvalidMoveError(dest)

        node = self.require(source)
        dest_parent, dest_name = self.parent_and_name(dest)
        self.require_directory(dest_parent)

        source_parent, source_name = self.parent_and_name(source)
        self.remove(source_parent, source_name, recursive=True)
        node.modified_at = now
        return self.insert(dest_parent, dest_name, node, overwrite=True)

    def walk(self, path: str = "/") -> Iterator[tuple[str, FilesystemNode]]:
        """Yield (path, node) pairs beneath path in pre-order.

        The starting path is yielded as given; descendants are joined onto it.
        Children are visited in ls order. Nothing is yielded for a missing path.
        """
        start = self.lookup(path)
        if start is None:
            return

        stack: list[tuple[str, FilesystemNode]] = [(path, start)]
        while stack:
            current_path, node = stack.pop()
            yield current_path, node
            if node.is_directory:
                for child in reversed(node.sorted_children()):
                    stack.append((join_path(current_path, child.name), child))
