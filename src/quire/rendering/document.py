"""Markdown document renderer.

Accepts documents whose name ends in one of the configured suffixes and
declines everything else before reading, so a plain-text fallback later
in the chain still gets an unread stream.

Once a document is accepted, failures are hard: undecodable bytes, bad
front matter, or an engine error raise a ``ContentError`` that aborts the
enclosing fold rather than degrading to plain text.
"""

from collections.abc import Iterable
from typing import cast

from quire.errors import Declined
from quire.markdown.engine import MarkdownEngine, PatitasEngine
from quire.markdown.title import DEFAULT_TITLE, extract
from quire.rendering.protocol import DOCUMENTS, Rendered, require_kind
from quire.sources.nodes import Document, Node

DEFAULT_SUFFIXES: tuple[str, ...] = (".md", ".markdown")


class MarkdownDocumentRenderer:
    """Render Markdown documents to HTML with title and metadata.

    Args:
        engine: Shared, immutable Markdown engine.
        lang: Language tag recorded on results.
        name: Unique renderer name.
        suffixes: File suffixes treated as Markdown (case-insensitive).
        default_title: Title when neither metadata nor a heading supplies one.
    """

    __slots__ = ("default_title", "engine", "lang", "name", "suffixes")

    accepts = DOCUMENTS
    terminal = False

    def __init__(
        self,
        engine: MarkdownEngine | None = None,
        *,
        lang: str = "en",
        name: str = "markdown",
        suffixes: Iterable[str] = DEFAULT_SUFFIXES,
        default_title: str = DEFAULT_TITLE,
    ) -> None:
        self.engine = engine if engine is not None else PatitasEngine()
        self.lang = lang
        self.name = name
        self.suffixes = tuple(s.lower() for s in suffixes)
        self.default_title = default_title

    def handles(self, name: str) -> bool:
        return name.lower().endswith(self.suffixes)

    def render(self, node: Node) -> Rendered:
        require_kind(self, node)
        document = cast(Document, node)
        if not self.handles(document.name):
            raise Declined(self.name, document.path, "not a markdown file")

        info = extract(
            document.read(),
            self.engine,
            default_title=self.default_title,
            path=document.path,
        )
        html = info.parsed.render()
        return Rendered(
            body=html.encode("utf-8"),
            content_type="text/html; charset=utf-8",
            renderer=self.name,
            path=document.path,
            lang=self.lang,
            title=info.title,
            metadata=info.metadata,
        )
