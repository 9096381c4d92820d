"""YAML front matter extraction.

A document may open with a YAML block fenced by ``---`` lines::

    ---
    title: Hello
    date: 2024-03-01
    ---
    # Body starts here

Only scalar values are kept; lists and nested mappings are dropped so the
metadata stays a flat ``str → scalar`` mapping.
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime
from types import MappingProxyType

import yaml

from quire.markdown.errors import DecodeError, FrontMatterError

logger = logging.getLogger("quire.markdown")

type Scalar = str | int | float | bool | date | datetime | None
type Metadata = Mapping[str, Scalar]

EMPTY_METADATA: Metadata = MappingProxyType({})

_FENCE = "---"
_CLOSERS = frozenset({"---", "..."})
_SCALARS = (str, int, float, bool, date, datetime)


def decode_source(data: bytes, *, path: str = "") -> str:
    """Decode document bytes as UTF-8, dropping a BOM and normalizing newlines."""
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        msg = f"Document is not valid UTF-8: {exc.reason} at byte {exc.start}"
        raise DecodeError(msg, path=path) from exc
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_front_matter(text: str, *, path: str = "") -> tuple[Metadata, str]:
    """Split *text* into ``(metadata, body)``.

    Documents without an opening fence, or with an opening fence that is
    never closed, have no metadata and are returned whole.

    Raises:
        FrontMatterError: The YAML is invalid or is not a mapping.
    """
    if not text.startswith(_FENCE + "\n"):
        return EMPTY_METADATA, text

    lines = text.splitlines(keepends=True)
    for i in range(1, len(lines)):
        if lines[i].strip() in _CLOSERS:
            raw = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            return _load(raw, path), body
    return EMPTY_METADATA, text


def _load(raw: str, path: str) -> Metadata:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        msg = f"Invalid front matter: {exc}"
        raise FrontMatterError(msg, path=path) from exc

    if data is None:
        return EMPTY_METADATA
    if not isinstance(data, dict):
        msg = f"Front matter must be a mapping, got {type(data).__name__}"
        raise FrontMatterError(msg, path=path)

    kept: dict[str, Scalar] = {}
    for key, value in data.items():
        if not isinstance(key, str):
            continue
        if value is not None and not isinstance(value, _SCALARS):
            logger.debug("Dropping non-scalar front matter key %r in /%s", key, path)
            continue
        kept[key] = value
    return MappingProxyType(kept)
