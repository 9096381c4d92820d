"""In-memory content source.

Builds nodes from a nested mapping. Handy for tests, fixtures, and
pages whose content ships with the application::

    source = MemorySource({
        "blog": {
            "post1.md": "# First",
            "drafts": {"wip.md": b"..."},
        },
    })
"""

from collections.abc import Mapping

from quire.errors import NotFound
from quire.sources.nodes import Directory, DirectoryEntry, Document, Node, join_path, normalize_path

type Tree = Mapping[str, bytes | str | Tree]


class MemorySource:
    """Content source backed by a nested mapping of names to content.

    Mappings are directories; ``bytes`` or ``str`` values are documents
    (strings are encoded as UTF-8).
    """

    __slots__ = ("_tree",)

    def __init__(self, tree: Tree) -> None:
        self._tree = tree

    def open(self, path: str) -> Node:
        path = normalize_path(path)
        current: bytes | str | Tree = self._tree
        if path:
            for segment in path.split("/"):
                if not isinstance(current, Mapping) or segment not in current:
                    raise NotFound(path)
                current = current[segment]

        if isinstance(current, Mapping):
            return Directory(
                path,
                (
                    DirectoryEntry(
                        name=name,
                        is_dir=isinstance(value, Mapping),
                        path=join_path(path, name),
                    )
                    for name, value in current.items()
                ),
            )

        data = current.encode("utf-8") if isinstance(current, str) else bytes(current)
        return Document(path, lambda: data, size=len(data))
