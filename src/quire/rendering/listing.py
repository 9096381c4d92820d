"""Directory listing renderer.

Turns a directory node into a naturally ordered index. Hidden entries
(names starting with the hidden prefix) and housekeeping files such as
``README.md`` or ``LICENSE`` are left out. Each remaining entry is tagged
with the renderer's language so templates can build localized links.
"""

import html
from collections.abc import Iterable
from typing import cast
from urllib.parse import quote

from quire.markdown.title import DEFAULT_TITLE
from quire.natsort import natsorted
from quire.rendering.protocol import DIRECTORIES, ListingEntry, Rendered, require_kind
from quire.sources.nodes import Directory, DirectoryEntry, Node

DEFAULT_EXCLUDED_NAMES: frozenset[str] = frozenset(
    {"README", "README.md", "LICENSE", "LICENSE.md", "CONTRIBUTING.md"}
)


class ListingRenderer:
    """Render directories as naturally sorted link lists.

    Args:
        lang: Language tag attached to every entry.
        name: Unique renderer name.
        hidden_prefix: Entries starting with this are hidden.
        excluded_names: Names never listed (compared case-insensitively).
        url_prefix: Prefix for entry links.
        root_title: Title used for the content root, which has no name.
    """

    __slots__ = ("_excluded", "hidden_prefix", "lang", "name", "root_title", "url_prefix")

    accepts = DIRECTORIES
    terminal = False

    def __init__(
        self,
        *,
        lang: str = "en",
        name: str = "listing",
        hidden_prefix: str = ".",
        excluded_names: Iterable[str] = DEFAULT_EXCLUDED_NAMES,
        url_prefix: str = "/",
        root_title: str = DEFAULT_TITLE,
    ) -> None:
        self.lang = lang
        self.name = name
        self.hidden_prefix = hidden_prefix
        self._excluded = frozenset(n.casefold() for n in excluded_names)
        self.url_prefix = url_prefix.rstrip("/")
        self.root_title = root_title

    def is_visible(self, entry: DirectoryEntry) -> bool:
        if self.hidden_prefix and entry.name.startswith(self.hidden_prefix):
            return False
        return entry.name.casefold() not in self._excluded

    def visible_entries(self, directory: Directory) -> list[DirectoryEntry]:
        """Filtered entries in natural order; ties keep source order."""
        return natsorted(
            (e for e in directory.entries() if self.is_visible(e)),
            key=lambda e: e.name,
        )

    def href(self, entry: DirectoryEntry) -> str:
        link = f"{self.url_prefix}/{quote(entry.path or entry.name)}"
        return f"{link}/" if entry.is_dir else link

    def render(self, node: Node) -> Rendered:
        require_kind(self, node)
        directory = cast(Directory, node)

        entries = tuple(
            ListingEntry(name=e.name, is_dir=e.is_dir, lang=self.lang, href=self.href(e))
            for e in self.visible_entries(directory)
        )
        title = directory.name or self.root_title
        return Rendered(
            body=_index_html(entries, self.lang).encode("utf-8"),
            content_type="text/html; charset=utf-8",
            renderer=self.name,
            path=directory.path,
            lang=self.lang,
            title=title,
            entries=entries,
        )


def _index_html(entries: tuple[ListingEntry, ...], lang: str) -> str:
    lang_attr = html.escape(lang, quote=True)
    lines = [f'<ul class="listing" lang="{lang_attr}">']
    for entry in entries:
        href = html.escape(entry.href, quote=True)
        label = html.escape(entry.name + ("/" if entry.is_dir else ""))
        lines.append(f'  <li><a href="{href}" hreflang="{lang_attr}">{label}</a></li>')
    lines.append("</ul>")
    return "\n".join(lines) + "\n"
