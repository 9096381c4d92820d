"""Markdown engine wrapping patitas.

The engine is built once at startup from an immutable ``MarkdownOptions``
and shared by every request. ``parse()`` splits front matter, builds the
patitas AST once, and returns a ``ParsedDocument`` whose heading walk and
HTML render share that AST.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import patitas
from patitas.nodes import Heading as HeadingNode

from quire.markdown.errors import MarkdownError
from quire.markdown.frontmatter import Metadata, split_front_matter

if TYPE_CHECKING:
    from patitas import Markdown


@dataclass(frozen=True, slots=True)
class MarkdownOptions:
    """Engine configuration. Immutable after creation.

    Attributes:
        plugins: Patitas plugins to enable (empty means all).
        highlight: Enable syntax highlighting for fenced code blocks.
    """

    plugins: tuple[str, ...] = ()
    highlight: bool = False


@dataclass(frozen=True, slots=True)
class Heading:
    """A heading found while walking a document."""

    level: int
    text: str


class ParsedDocument(Protocol):
    """What the document renderer needs from a parsed document."""

    @property
    def metadata(self) -> Metadata: ...

    def headings(self) -> Iterator[Heading]: ...

    def render(self) -> str: ...


class MarkdownEngine(Protocol):
    def parse(self, source: str, *, path: str = "") -> ParsedDocument: ...


class PatitasEngine:
    """Markdown engine backed by ``patitas``.

    Args:
        options: Plugin and highlighting configuration.
    """

    __slots__ = ("_md", "options")

    def __init__(self, options: MarkdownOptions | None = None) -> None:
        self.options = options or MarkdownOptions()
        self._md: Markdown = patitas.Markdown(
            plugins=list(self.options.plugins) or ["all"],
            highlight=self.options.highlight,
        )

    def parse(self, source: str, *, path: str = "") -> PatitasDocument:
        """Parse *source* (front matter included) into a document.

        The body is parsed once, with the configured plugins; the same AST
        feeds the heading walk and the HTML render.

        Raises:
            FrontMatterError: The front matter is invalid.
            MarkdownError: patitas failed on the body.
        """
        metadata, body = split_front_matter(source, path=path)
        try:
            ast = self._md.parse(body, source_file=path or None)
        except Exception as exc:
            msg = f"Markdown parse failed: {exc}"
            raise MarkdownError(msg, path=path) from exc
        return PatitasDocument(self._md, body, ast, metadata, path)


class PatitasDocument:
    """A parsed document: metadata, AST, and the body it came from."""

    __slots__ = ("_ast", "_body", "_md", "_metadata", "path")

    def __init__(self, md: Markdown, body: str, ast: Any, metadata: Metadata, path: str) -> None:
        self._md = md
        self._body = body
        self._ast = ast
        self._metadata = metadata
        self.path = path

    @property
    def metadata(self) -> Metadata:
        return self._metadata

    def headings(self) -> Iterator[Heading]:
        """Yield headings lazily, depth-first in document order.

        Headings nested in container blocks (block quotes, list items)
        are included at their position in the source.
        """
        for node in walk(self._ast):
            if isinstance(node, HeadingNode):
                yield Heading(level=node.level, text=inline_text(node.children))

    def render(self) -> str:
        if not self._body:
            return ""
        try:
            return self._md.render(self._ast, source=self._body)
        except Exception as exc:
            msg = f"Markdown render failed: {exc}"
            raise MarkdownError(msg, path=self.path) from exc


def walk(node: Any) -> Iterator[Any]:
    """Yield the blocks under *node*, depth-first in document order.

    Headings are yielded but not descended into.
    """
    for attr in ("children", "items"):
        nested = getattr(node, attr, None)
        if not isinstance(nested, (tuple, list)):
            continue
        for child in nested:
            yield child
            if not isinstance(child, HeadingNode):
                yield from walk(child)


def inline_text(nodes: Iterable[Any]) -> str:
    """Flatten inline nodes to their visible text, collapsing whitespace."""
    parts: list[str] = []
    _collect(nodes, parts)
    return " ".join("".join(parts).split())


def _collect(nodes: Iterable[Any], parts: list[str]) -> None:
    for node in nodes:
        for attr in ("content", "code"):
            value = getattr(node, attr, None)
            if isinstance(value, str):
                parts.append(value)
                break
        else:
            if type(node).__name__ in ("SoftBreak", "LineBreak", "HardBreak"):
                parts.append(" ")
        children = getattr(node, "children", None)
        if children:
            _collect(children, parts)
