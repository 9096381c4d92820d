"""Renderers, folding chains, and the per-locale dispatcher.

Basic usage::

    from quire.rendering import Chain, Dispatcher, ListingRenderer, PlainRenderer
    from quire.sources import MemorySource

    dispatcher = Dispatcher(
        MemorySource({"post1.md": "# Hello"}),
        [ListingRenderer(), PlainRenderer()],
    )
    dispatcher.render_path("/").entries
"""

from quire.rendering.chain import Chain
from quire.rendering.dispatch import Dispatcher
from quire.rendering.document import MarkdownDocumentRenderer
from quire.rendering.listing import ListingRenderer
from quire.rendering.plain import PlainRenderer
from quire.rendering.protocol import ListingEntry, Rendered, Renderer, write_to

__all__ = [
    "Chain",
    "Dispatcher",
    "ListingEntry",
    "ListingRenderer",
    "MarkdownDocumentRenderer",
    "PlainRenderer",
    "Rendered",
    "Renderer",
    "write_to",
]
