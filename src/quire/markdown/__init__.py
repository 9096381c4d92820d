"""Markdown parsing, front matter, and title resolution via patitas.

Basic usage::

    from quire.markdown import PatitasEngine, extract

    engine = PatitasEngine()
    info = extract(b"# Hello", engine)
    info.title            # "Hello"
    info.parsed.render()  # "<h1 ...>Hello</h1>"
"""

from quire.markdown.engine import (
    Heading,
    MarkdownEngine,
    MarkdownOptions,
    ParsedDocument,
    PatitasEngine,
)
from quire.markdown.errors import DecodeError, FrontMatterError, MarkdownError
from quire.markdown.frontmatter import Metadata, decode_source, split_front_matter
from quire.markdown.title import DEFAULT_TITLE, DocumentInfo, extract, resolve_title

__all__ = [
    "DEFAULT_TITLE",
    "DecodeError",
    "DocumentInfo",
    "FrontMatterError",
    "Heading",
    "MarkdownEngine",
    "MarkdownError",
    "MarkdownOptions",
    "Metadata",
    "ParsedDocument",
    "PatitasEngine",
    "decode_source",
    "extract",
    "resolve_title",
    "split_front_matter",
]
