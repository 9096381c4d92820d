"""Plain output renderer — the terminal fallback.

Accepts every node and never declines, so a chain ending with it always
finishes with a result or a genuine error. Documents are passed through
as raw bytes; directories become a newline-separated name list.
"""

import mimetypes
from typing import cast

from quire.natsort import natsorted
from quire.rendering.protocol import ALL_KINDS, Rendered
from quire.sources.nodes import Directory, Document, Node, NodeKind

_FALLBACK_TYPE = "application/octet-stream"


def guess_content_type(name: str) -> str:
    """Guess a MIME type from a file name, adding a charset for text."""
    content_type, _ = mimetypes.guess_type(name)
    if content_type is None:
        return _FALLBACK_TYPE
    if content_type.startswith("text/"):
        return f"{content_type}; charset=utf-8"
    return content_type


class PlainRenderer:
    """Raw passthrough for documents, plain name list for directories."""

    __slots__ = ("lang", "name")

    accepts = ALL_KINDS
    terminal = True

    def __init__(self, *, lang: str = "en", name: str = "plain") -> None:
        self.lang = lang
        self.name = name

    def render(self, node: Node) -> Rendered:
        if node.kind is NodeKind.DIRECTORY:
            directory = cast(Directory, node)
            names = natsorted(e.name + ("/" if e.is_dir else "") for e in directory.entries())
            body = "".join(f"{n}\n" for n in names).encode("utf-8")
            content_type = "text/plain; charset=utf-8"
        else:
            document = cast(Document, node)
            body = document.read()
            content_type = guess_content_type(document.name)

        return Rendered(
            body=body,
            content_type=content_type,
            renderer=self.name,
            path=node.path,
            lang=self.lang,
            title=node.name or None,
        )
