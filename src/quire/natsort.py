"""Natural-order string comparison.

Names are split into maximal runs of digits and non-digits. Digit runs
compare as integers, everything else compares as plain strings, so
``file2.md`` sorts before ``file10.md``.

The comparison is a strict weak ordering: equal strings (and strings that
differ only in leading zeros of a digit run) compare false both ways, and
``natsorted`` is stable, so ties keep their enumeration order.
"""

import re
from collections.abc import Callable, Iterable
from functools import cmp_to_key
from typing import Any

_CHUNK_RE = re.compile(r"(\d+|\D+)", re.ASCII)


def chunkify(s: str) -> list[str]:
    """Split *s* into alternating digit and non-digit runs."""
    return _CHUNK_RE.findall(s)


def _is_number(chunk: str) -> bool:
    return chunk.isascii() and chunk.isdigit()


def compare(a: str, b: str) -> bool:
    """Return ``True`` if *a* sorts before *b* in natural order."""
    chunks_a = chunkify(a)
    chunks_b = chunkify(b)

    for chunk_a, chunk_b in zip(chunks_a, chunks_b, strict=False):
        if _is_number(chunk_a) and _is_number(chunk_b):
            int_a, int_b = int(chunk_a), int(chunk_b)
            if int_a != int_b:
                return int_a < int_b
            continue

        if chunk_a != chunk_b:
            return chunk_a < chunk_b

    # All shared chunks match: the exhausted sequence sorts first
    return len(chunks_a) < len(chunks_b)


def _cmp(a: str, b: str) -> int:
    if compare(a, b):
        return -1
    if compare(b, a):
        return 1
    return 0


natural_key = cmp_to_key(_cmp)
"""Sort key adapter: ``sorted(names, key=natural_key)``."""


def natsorted[T](items: Iterable[T], key: Callable[[T], str] | None = None) -> list[T]:
    """Return *items* sorted in natural order.

    Args:
        items: Strings, or arbitrary objects when *key* is given.
        key: Extracts the name to compare from each item.
    """
    if key is None:
        return sorted(items, key=natural_key)  # type: ignore[arg-type]
    extract: Callable[[Any], str] = key
    return sorted(items, key=lambda item: natural_key(extract(item)))
