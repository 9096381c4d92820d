"""Dispatcher — resolves a path from the source and folds over renderers.

The dispatcher is a ``Chain`` whose last renderer must be terminal (never
declines). That is checked at construction, so a request for an existing
node always ends in a result, a ``ContentError``, or a ``SourceError``;
a decline never reaches the caller.

One dispatcher is built per locale; the caller picks the right one before
calling ``render_path``.
"""

import logging
from collections.abc import Iterable
from typing import BinaryIO

from quire.errors import (
    ConfigurationError,
    Declined,
    NotFound,
    QuireError,
    SourceError,
    TransientFetchError,
)
from quire.rendering.chain import Chain, annotate
from quire.rendering.protocol import Rendered, Renderer
from quire.sources.nodes import ContentSource, Node, normalize_path

logger = logging.getLogger("quire.render")


class Dispatcher(Chain):
    """Top-level folding renderer bound to a content source.

    Args:
        source: Where nodes come from.
        renderers: Renderers in priority order; the last one must be
            terminal.
        lang: Locale this dispatcher serves.
        name: Unique renderer name.

    Raises:
        ConfigurationError: The chain is empty, has duplicate names, or
            does not end with a terminal renderer.
    """

    __slots__ = ("lang", "source")

    def __init__(
        self,
        source: ContentSource,
        renderers: Iterable[Renderer],
        *,
        lang: str = "en",
        name: str = "dispatcher",
    ) -> None:
        super().__init__(name, renderers)
        last = self.children[-1]
        if not last.terminal:
            msg = (
                f"Dispatcher {name!r} must end with a terminal fallback renderer, "
                f"got {last.name!r}"
            )
            raise ConfigurationError(msg)
        self.source = source
        self.lang = lang

    def open(self, path: str) -> Node:
        """Resolve *path* to a node. Source errors propagate unchanged."""
        path = normalize_path(path)
        try:
            return self.source.open(path)
        except NotFound:
            logger.debug("%s: /%s not found", self.name, path)
            raise
        except SourceError:
            raise
        except OSError as exc:
            msg = f"Source failed for /{path}: {exc}"
            raise TransientFetchError(msg, path=path) from exc

    def render_path(self, path: str) -> Rendered:
        """Render the node at *path*.

        Raises:
            NotFound: Nothing exists at *path*.
            TransientFetchError: The source failed transiently.
            MalformedResponse: The source returned garbage.
            ContentError: A renderer accepted the node and failed.
        """
        node = self.open(path)
        try:
            return self.render(node)
        except Declined as exc:
            # Unreachable while the last renderer is terminal
            msg = f"No renderer accepted /{node.path} in {self.name!r}"
            raise ConfigurationError(msg) from exc
        except OSError as exc:
            msg = f"Read failed for /{node.path}: {exc}"
            err = TransientFetchError(msg, path=node.path)
            annotate(err, self.name)
            raise err from exc
        except NotFound:
            logger.debug("%s: /%s not found while rendering", self.name, node.path)
            raise
        except QuireError as exc:
            logger.warning("%s: /%s failed: %s", self.name, node.path, exc)
            raise

    def write_path(self, path: str, sink: BinaryIO) -> Rendered:
        """Render *path* fully, then write the body to *sink*."""
        result = self.render_path(path)
        sink.write(result.body)
        return result
