"""Site configuration.

One frozen dataclass describes where content comes from and how it is
rendered. It is validated once, at construction, so a bad value fails
at startup rather than on the first request.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from quire.errors import ConfigurationError
from quire.markdown.engine import MarkdownOptions
from quire.markdown.title import DEFAULT_TITLE
from quire.rendering.document import DEFAULT_SUFFIXES
from quire.rendering.listing import DEFAULT_EXCLUDED_NAMES

type Mode = Literal["render", "raw"]

_MODES = ("render", "raw")
_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SiteConfig(
            endpoint="https://forge.example.com/api/v1",
            owner="team",
            repo="website",
            locales=("en", "pt-BR"),
            locale_refs=(("pt-BR", "main-pt"),),
        )
    """

    # Remote source (Forgejo / Gitea contents API)
    endpoint: str = ""
    owner: str = ""
    repo: str = ""
    ref: str | None = None  # Default branch, tag, or commit
    locale_refs: tuple[tuple[str, str], ...] = ()  # (locale, ref) overrides
    token: str | None = None  # Falls back to QUIRE_FORGEJO_TOKEN
    timeout: float = 10.0

    # Local checkout of the content repository; wins over endpoint
    local_dir: str | Path | None = None

    # Directory inside the repository that holds the content
    root: str = "blog"

    # Rendering
    locales: tuple[str, ...] = ("en",)  # First entry is the default locale
    default_title: str = DEFAULT_TITLE
    hidden_prefix: str = "."
    excluded_names: tuple[str, ...] = tuple(sorted(DEFAULT_EXCLUDED_NAMES))
    markdown_suffixes: tuple[str, ...] = DEFAULT_SUFFIXES
    url_prefix: str = "/blog"
    markdown_plugins: tuple[str, ...] = ()  # Empty enables every patitas plugin
    highlight: bool = False
    mode: Mode = "render"  # "raw" serves bytes straight from the source

    # Logging
    log_level: str = "info"

    def __post_init__(self) -> None:
        if not self.locales:
            msg = "SiteConfig.locales must name at least one locale"
            raise ConfigurationError(msg)
        if len(set(self.locales)) != len(self.locales):
            msg = f"SiteConfig.locales has duplicates: {self.locales!r}"
            raise ConfigurationError(msg)
        if self.mode not in _MODES:
            msg = f"Unknown mode {self.mode!r}. Expected one of: {', '.join(_MODES)}"
            raise ConfigurationError(msg)
        for lang, _ in self.locale_refs:
            if lang not in self.locales:
                msg = f"SiteConfig.locale_refs names unknown locale {lang!r}"
                raise ConfigurationError(msg)
        if len(dict(self.locale_refs)) != len(self.locale_refs):
            msg = f"SiteConfig.locale_refs has duplicates: {self.locale_refs!r}"
            raise ConfigurationError(msg)
        if not self.hidden_prefix:
            msg = "SiteConfig.hidden_prefix must not be empty"
            raise ConfigurationError(msg)
        if self.timeout <= 0:
            msg = f"SiteConfig.timeout must be positive, got {self.timeout}"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in _LOG_LEVELS:
            msg = f"Unknown log level {self.log_level!r}"
            raise ConfigurationError(msg)

    @property
    def default_locale(self) -> str:
        return self.locales[0]

    def ref_for(self, lang: str) -> str | None:
        """Content ref for *lang*: its override, else the shared ``ref``."""
        return dict(self.locale_refs).get(lang, self.ref)

    @property
    def markdown_options(self) -> MarkdownOptions:
        return MarkdownOptions(plugins=self.markdown_plugins, highlight=self.highlight)
