"""Markdown layer error hierarchy.

Every markdown failure is a ``ContentError``: the document was accepted
for rendering, so a failure here aborts any enclosing fold instead of
falling through to plain text.
"""

from quire.errors import ContentError


class MarkdownError(ContentError):
    """Base for all quire.markdown errors."""


class FrontMatterError(MarkdownError):
    """Raised when a document's YAML front matter is invalid."""


class DecodeError(MarkdownError):
    """Raised when document bytes are not valid UTF-8."""
