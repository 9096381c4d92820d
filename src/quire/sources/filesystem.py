"""Local filesystem content source.

Serves a directory tree from disk with the same contract as the remote
source, so a checkout of the content repository can be previewed
without network access.
"""

import logging
from pathlib import Path

from quire.errors import NotFound, TransientFetchError
from quire.sources.nodes import Directory, DirectoryEntry, Document, Node, join_path, normalize_path

logger = logging.getLogger("quire.sources")


class FileSystemSource:
    """Content source rooted at a local directory.

    Paths that resolve outside the root (via symlinks) are reported as
    ``NotFound``.
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def open(self, path: str) -> Node:
        path = normalize_path(path)
        target = (self._root / path).resolve() if path else self._root

        if not target.is_relative_to(self._root) or not target.exists():
            raise NotFound(path)

        if target.is_dir():
            try:
                children = list(target.iterdir())
            except OSError as exc:
                msg = f"Cannot list /{path}: {exc}"
                raise TransientFetchError(msg, path=path) from exc
            return Directory(
                path,
                (
                    DirectoryEntry(
                        name=child.name,
                        is_dir=child.is_dir(),
                        path=join_path(path, child.name),
                    )
                    for child in children
                ),
            )

        def _read() -> bytes:
            try:
                return target.read_bytes()
            except OSError as exc:
                logger.warning("Failed to read %s: %s", target, exc)
                msg = f"Cannot read /{path}: {exc}"
                raise TransientFetchError(msg, path=path) from exc

        return Document(path, _read, size=target.stat().st_size)
