"""Title resolution for parsed documents.

Priority order:

1. ``title`` in the front matter, when it is a string, verbatim
2. the text of the first level-1 ``#`` heading, in a depth-first walk
   of the document (headings inside block quotes and lists count)
3. the configured default title

The heading scan stops at the first level-1 heading; later or "better"
headings are never considered.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from quire.markdown.engine import Heading, MarkdownEngine, ParsedDocument
from quire.markdown.frontmatter import Metadata, decode_source

DEFAULT_TITLE = "Blog"

type TitleOrigin = Literal["metadata", "heading", "default"]


def resolve_title(
    metadata: Metadata,
    headings: Iterable[Heading],
    default: str = DEFAULT_TITLE,
) -> tuple[str, TitleOrigin]:
    """Pick a title and report where it came from."""
    title = metadata.get("title")
    if isinstance(title, str):
        return title, "metadata"

    for heading in headings:
        if heading.level == 1:
            return heading.text, "heading"

    return default, "default"


@dataclass(frozen=True, slots=True)
class DocumentInfo:
    """Everything extracted from one document's bytes."""

    title: str
    title_origin: TitleOrigin
    metadata: Metadata
    parsed: ParsedDocument


def extract(
    data: bytes,
    engine: MarkdownEngine,
    *,
    default_title: str = DEFAULT_TITLE,
    path: str = "",
) -> DocumentInfo:
    """Decode, parse, and resolve the title of a document.

    Raises:
        DecodeError: *data* is not UTF-8.
        FrontMatterError: The front matter is invalid.
        MarkdownError: The engine failed.
    """
    parsed = engine.parse(decode_source(data, path=path), path=path)
    title, origin = resolve_title(parsed.metadata, parsed.headings(), default_title)
    return DocumentInfo(title=title, title_origin=origin, metadata=parsed.metadata, parsed=parsed)
