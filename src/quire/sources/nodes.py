"""Content nodes — the values a content source hands to renderers.

A node is either a ``Directory`` (enumerable entries) or a ``Document``
(a byte stream readable exactly once). Nodes are produced fresh for
every request and are never mutated while a render is in progress.

Renderers check ``node.kind`` against their declared capabilities
instead of testing concrete classes.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from quire.errors import DocumentConsumedError, MalformedResponse, NotFound


class NodeKind(Enum):
    """Shape of a content node."""

    DIRECTORY = "directory"
    DOCUMENT = "document"


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """One child of a directory, as reported by the source."""

    name: str
    is_dir: bool
    path: str = ""


class Directory:
    """A directory node. Entry order carries no meaning."""

    __slots__ = ("_entries", "path")

    kind = NodeKind.DIRECTORY

    def __init__(self, path: str, entries: Iterable[DirectoryEntry]) -> None:
        self.path = path
        collected = tuple(entries)
        seen: set[str] = set()
        for entry in collected:
            if entry.name in seen:
                msg = f"Duplicate entry {entry.name!r} in /{path}"
                raise MalformedResponse(msg, path=path)
            seen.add(entry.name)
        self._entries = collected

    @property
    def name(self) -> str:
        return basename(self.path)

    def entries(self) -> tuple[DirectoryEntry, ...]:
        return self._entries

    def __repr__(self) -> str:
        return f"Directory({self.path!r}, {len(self._entries)} entries)"


class Document:
    """A document node wrapping a one-shot byte reader.

    The reader is not invoked until ``read()``, so a renderer that
    declines never triggers a fetch.
    """

    __slots__ = ("_consumed", "_reader", "path", "sha", "size")

    kind = NodeKind.DOCUMENT

    def __init__(
        self,
        path: str,
        reader: Callable[[], bytes],
        *,
        size: int | None = None,
        sha: str | None = None,
    ) -> None:
        self.path = path
        self.size = size
        self.sha = sha
        self._reader = reader
        self._consumed = False

    @property
    def name(self) -> str:
        return basename(self.path)

    def read(self) -> bytes:
        """Return the document bytes. A second call raises."""
        if self._consumed:
            raise DocumentConsumedError(self.path)
        self._consumed = True
        return self._reader()

    def __repr__(self) -> str:
        return f"Document({self.path!r})"


type Node = Directory | Document


@runtime_checkable
class ContentSource(Protocol):
    """Anything that can resolve a path to a fresh node.

    Implementations raise ``NotFound``, ``TransientFetchError`` or
    ``MalformedResponse``; nothing else is expected to escape.
    """

    def open(self, path: str) -> Node: ...


# -- Path helpers --


def normalize_path(path: str) -> str:
    """Normalize a request path relative to the content root.

    Strips surrounding slashes and ``.`` segments. A ``..`` segment or a
    backslash can never name a node under the root, so both raise
    ``NotFound``. The root itself is the empty string.
    """
    if "\\" in path or "\x00" in path:
        raise NotFound(path)
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            raise NotFound(path)
        parts.append(segment)
    return "/".join(parts)


def join_path(parent: str, name: str) -> str:
    return f"{parent}/{name}" if parent else name


def basename(path: str) -> str:
    return path.rsplit("/", 1)[-1] if path else ""
