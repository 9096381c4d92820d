"""Renderer protocol and render results.

A renderer turns one node into a ``Rendered`` value or raises. It never
produces partial output: ``write_to`` only touches the sink once the
render has fully succeeded.

Free-threading safety:
    - Rendered and ListingEntry are frozen dataclasses
    - Renderers hold only read-only configuration set at construction
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, BinaryIO, Protocol, runtime_checkable

from quire.errors import Declined
from quire.sources.nodes import Node, NodeKind

ALL_KINDS: frozenset[NodeKind] = frozenset(NodeKind)
DIRECTORIES: frozenset[NodeKind] = frozenset({NodeKind.DIRECTORY})
DOCUMENTS: frozenset[NodeKind] = frozenset({NodeKind.DOCUMENT})


@dataclass(frozen=True, slots=True)
class ListingEntry:
    """One visible entry of a rendered directory index.

    Attributes:
        name: Entry name as stored in the source.
        is_dir: Whether the entry is a directory.
        lang: Language tag of the listing that produced it.
        href: Link target for the entry.
    """

    name: str
    is_dir: bool
    lang: str
    href: str


@dataclass(frozen=True, slots=True)
class Rendered:
    """A complete render result.

    Attributes:
        body: Output bytes.
        content_type: MIME type of ``body``.
        renderer: Name of the renderer that produced it.
        path: Node path it was rendered from.
        lang: Language tag of the producing renderer.
        title: Resolved page title, if the renderer knows one.
        metadata: Document metadata (empty when the document has none).
        entries: Directory index entries (listings only).
    """

    body: bytes
    content_type: str
    renderer: str
    path: str = ""
    lang: str = ""
    title: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    entries: tuple[ListingEntry, ...] = ()

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@runtime_checkable
class Renderer(Protocol):
    """A named unit that renders nodes of the kinds it accepts.

    Attributes:
        name: Unique name, used in diagnostics.
        accepts: Node kinds the renderer may accept. Anything else is
            declined without touching the node.
        terminal: ``True`` if the renderer never declines.
    """

    @property
    def name(self) -> str: ...

    @property
    def accepts(self) -> frozenset[NodeKind]: ...

    @property
    def terminal(self) -> bool: ...

    def render(self, node: Node) -> Rendered: ...


def require_kind(renderer: Renderer, node: Node) -> None:
    """Decline unless *node*'s kind is in *renderer*'s capability set."""
    if node.kind not in renderer.accepts:
        raise Declined(renderer.name, node.path, f"does not render {node.kind.value} nodes")


def write_to(renderer: Renderer, node: Node, sink: BinaryIO) -> Rendered:
    """Render *node* completely, then write the body to *sink*.

    On any error the sink is left untouched.
    """
    result = renderer.render(node)
    sink.write(result.body)
    return result
