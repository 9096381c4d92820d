"""Site assembly — one dispatcher per locale from a ``SiteConfig``.

Everything built here is immutable and shared across requests: the
content sources (one per distinct ref), the Markdown engine, and the
per-locale chains.

Default chain, in priority order::

    listing        directories → naturally sorted index
    documents      Chain[markdown]
    plain          terminal passthrough

In ``mode="raw"`` the chain is just ``plain``, serving source bytes
untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from quire.config import SiteConfig
from quire.errors import ConfigurationError
from quire.markdown.engine import MarkdownEngine, PatitasEngine
from quire.rendering.chain import Chain
from quire.rendering.dispatch import Dispatcher
from quire.rendering.document import MarkdownDocumentRenderer
from quire.rendering.listing import ListingRenderer
from quire.rendering.plain import PlainRenderer
from quire.rendering.protocol import Rendered, Renderer
from quire.sources.filesystem import FileSystemSource
from quire.sources.forgejo import ForgejoSource
from quire.sources.nodes import ContentSource

logger = logging.getLogger("quire.site")


def build_source(
    config: SiteConfig,
    *,
    ref: str | None = None,
    client: httpx.Client | None = None,
) -> ContentSource:
    """Create the content source described by *config*.

    A ``local_dir`` wins over a remote ``endpoint``. *ref* overrides
    ``config.ref`` for the remote source; *client* is handed to it as a
    pre-built ``httpx.Client``.
    """
    if config.local_dir is not None:
        return FileSystemSource(Path(config.local_dir) / config.root)
    if config.endpoint and config.owner and config.repo:
        return ForgejoSource(
            config.endpoint,
            config.owner,
            config.repo,
            root=config.root,
            ref=ref if ref is not None else config.ref,
            token=config.token,
            timeout=config.timeout,
            client=client,
        )
    msg = "SiteConfig needs either local_dir or endpoint, owner, and repo"
    raise ConfigurationError(msg)


def build_dispatcher(
    config: SiteConfig,
    source: ContentSource,
    lang: str,
    *,
    engine: MarkdownEngine | None = None,
) -> Dispatcher:
    """Assemble the renderer chain for one locale."""
    renderers: list[Renderer] = []
    if config.mode == "render":
        renderers.append(
            ListingRenderer(
                lang=lang,
                hidden_prefix=config.hidden_prefix,
                excluded_names=config.excluded_names,
                url_prefix=config.url_prefix,
                root_title=config.default_title,
            )
        )
        renderers.append(
            Chain(
                "documents",
                [
                    MarkdownDocumentRenderer(
                        engine or PatitasEngine(config.markdown_options),
                        lang=lang,
                        suffixes=config.markdown_suffixes,
                        default_title=config.default_title,
                    ),
                ],
            )
        )
    renderers.append(PlainRenderer(lang=lang))
    return Dispatcher(source, renderers, lang=lang, name=f"dispatcher[{lang}]")


class Site:
    """Per-locale dispatchers, each bound to its locale's content source.

    Locales that read the same ref share one source.

    Usage::

        site = build_site(SiteConfig(local_dir="content"))
        page = site.render_path("2024/post1.md", lang="en")
        page.title, page.body
    """

    __slots__ = ("_dispatchers", "config")

    def __init__(self, config: SiteConfig, dispatchers: dict[str, Dispatcher]) -> None:
        self.config = config
        self._dispatchers = dict(dispatchers)

    @property
    def locales(self) -> tuple[str, ...]:
        return tuple(self._dispatchers)

    @property
    def sources(self) -> tuple[ContentSource, ...]:
        """Distinct sources behind the dispatchers, in locale order."""
        unique: dict[int, ContentSource] = {}
        for dispatcher in self._dispatchers.values():
            unique.setdefault(id(dispatcher.source), dispatcher.source)
        return tuple(unique.values())

    def dispatcher(self, lang: str | None = None) -> Dispatcher:
        """Return the dispatcher for *lang*, or the default locale's."""
        if lang is not None and lang in self._dispatchers:
            return self._dispatchers[lang]
        if lang is not None:
            logger.debug("Unknown locale %r, using %r", lang, self.config.default_locale)
        return self._dispatchers[self.config.default_locale]

    def render_path(self, path: str, *, lang: str | None = None) -> Rendered:
        return self.dispatcher(lang).render_path(path)

    def close(self) -> None:
        for source in self.sources:
            close = getattr(source, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> Site:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_site(
    config: SiteConfig,
    source: ContentSource | None = None,
    *,
    client: httpx.Client | None = None,
) -> Site:
    """Build every locale's dispatcher once, sharing one engine.

    Without an explicit *source*, one source is built per distinct ref
    (``SiteConfig.ref_for``), so a locale with its own branch reads from
    that branch. A local checkout has no refs and is shared by every
    locale. *client* is passed to remote sources, which then leave
    closing it to the caller.
    """
    engine = PatitasEngine(config.markdown_options) if config.mode == "render" else None
    by_ref: dict[str | None, ContentSource] = {}
    dispatchers: dict[str, Dispatcher] = {}
    for lang in config.locales:
        if source is not None:
            locale_source = source
        else:
            ref = None if config.local_dir is not None else config.ref_for(lang)
            if ref not in by_ref:
                by_ref[ref] = build_source(config, ref=ref, client=client)
            locale_source = by_ref[ref]
        dispatchers[lang] = build_dispatcher(config, locale_source, lang, engine=engine)
    logger.debug(
        "Built %d dispatcher(s) over %d source(s) in %s mode",
        len(dispatchers),
        len(by_ref) or 1,
        config.mode,
    )
    return Site(config, dispatchers)
