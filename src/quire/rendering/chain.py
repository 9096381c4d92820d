"""Folding renderer — an ordered chain of renderers that is itself a renderer.

Children are tried in registration order. ``Declined`` moves on to the
next child; any other exception aborts the fold and propagates unchanged,
annotated with the failing child's name. When every child declines, the
chain declines too, so chains nest freely.

Children are frozen into a tuple at construction and never mutated
afterwards.
"""

import logging
from collections.abc import Iterable, Iterator

from quire.errors import ConfigurationError, ContentError, Declined, SourceError
from quire.rendering.protocol import Rendered, Renderer
from quire.sources.nodes import Node, NodeKind

logger = logging.getLogger("quire.render")


class Chain:
    """A folding renderer over an ordered tuple of children.

    Args:
        name: Unique renderer name.
        children: Renderers in priority order (first match wins).

    Raises:
        ConfigurationError: *children* is empty, or renderer names are not
            unique across the whole tree.
    """

    __slots__ = ("_children", "accepts", "name", "terminal")

    def __init__(self, name: str, children: Iterable[Renderer]) -> None:
        kids = tuple(children)
        if not kids:
            msg = f"Chain {name!r} has no renderers"
            raise ConfigurationError(msg)

        self.name = name
        self._children = kids
        self.accepts: frozenset[NodeKind] = frozenset().union(*(c.accepts for c in kids))
        # One terminal child is enough: the fold always reaches it
        self.terminal = any(c.terminal for c in kids)
        check_unique_names(self)

    @property
    def children(self) -> tuple[Renderer, ...]:
        return self._children

    def render(self, node: Node) -> Rendered:
        if node.kind not in self.accepts:
            raise Declined(self.name, node.path, f"no child renders {node.kind.value} nodes")

        for child in self._children:
            try:
                result = child.render(node)
            except Declined as exc:
                logger.debug("%s: %s", self.name, exc)
                continue
            except Exception as exc:
                annotate(exc, child.name)
                raise
            logger.debug("%s: /%s rendered by %s", self.name, node.path, child.name)
            return result

        raise Declined(self.name, node.path, "every child declined")

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self._children)
        return f"{type(self).__name__}({self.name!r}, [{names}])"


def annotate(exc: BaseException, renderer: str) -> None:
    """Attach the failing renderer's name to *exc* without replacing it."""
    if isinstance(exc, (ContentError, SourceError)) and exc.renderer is None:
        exc.renderer = renderer
    exc.add_note(f"raised in renderer {renderer!r}")


def iter_renderers(renderer: Renderer) -> Iterator[Renderer]:
    """Yield *renderer* and, for chains, every renderer nested inside it."""
    yield renderer
    if isinstance(renderer, Chain):
        for child in renderer.children:
            yield from iter_renderers(child)


def check_unique_names(root: Renderer) -> None:
    seen: set[str] = set()
    for renderer in iter_renderers(root):
        if renderer.name in seen:
            msg = f"Duplicate renderer name {renderer.name!r} in chain {root.name!r}"
            raise ConfigurationError(msg)
        seen.add(renderer.name)
