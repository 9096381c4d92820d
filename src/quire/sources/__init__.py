"""Content sources — where nodes come from.

A source resolves a path under its content root to a fresh
``Directory`` or ``Document``. Three implementations ship:

- ``ForgejoSource`` — remote repository via the Forgejo/Gitea contents API
- ``FileSystemSource`` — a local checkout
- ``MemorySource`` — a nested mapping, for tests and bundled pages
"""

from quire.sources.filesystem import FileSystemSource
from quire.sources.forgejo import ForgejoSource
from quire.sources.memory import MemorySource
from quire.sources.nodes import (
    ContentSource,
    Directory,
    DirectoryEntry,
    Document,
    Node,
    NodeKind,
    normalize_path,
)

__all__ = [
    "ContentSource",
    "Directory",
    "DirectoryEntry",
    "Document",
    "FileSystemSource",
    "ForgejoSource",
    "MemorySource",
    "Node",
    "NodeKind",
    "normalize_path",
]
