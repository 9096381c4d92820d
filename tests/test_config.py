"""Tests for quire.config — SiteConfig frozen dataclass."""

from pathlib import Path

import pytest

from quire.config import SiteConfig
from quire.errors import ConfigurationError
from quire.markdown import MarkdownOptions


class TestSiteConfig:
    def test_defaults(self) -> None:
        cfg = SiteConfig()

        assert cfg.endpoint == ""
        assert cfg.root == "blog"
        assert cfg.locales == ("en",)
        assert cfg.default_locale == "en"
        assert cfg.hidden_prefix == "."
        assert "README.md" in cfg.excluded_names
        assert cfg.markdown_suffixes == (".md", ".markdown")
        assert cfg.mode == "render"
        assert cfg.timeout == 10.0
        assert cfg.default_title == "Blog"
        assert cfg.locale_refs == ()

    def test_override(self) -> None:
        cfg = SiteConfig(endpoint="https://forge.example.com/api/v1", owner="team", repo="site", locales=("pt", "en"))

        assert cfg.owner == "team"
        assert cfg.default_locale == "pt"

    def test_frozen(self) -> None:
        cfg = SiteConfig()

        with pytest.raises(AttributeError):
            cfg.root = "docs"  # type: ignore[misc]

    def test_local_dir_as_path(self) -> None:
        cfg = SiteConfig(local_dir=Path("content"))
        assert cfg.local_dir == Path("content")

    def test_markdown_options(self) -> None:
        cfg = SiteConfig(markdown_plugins=("tables",), highlight=True)
        assert cfg.markdown_options == MarkdownOptions(plugins=("tables",), highlight=True)


class TestValidation:
    def test_empty_locales(self) -> None:
        with pytest.raises(ConfigurationError, match="locale"):
            SiteConfig(locales=())

    def test_duplicate_locales(self) -> None:
        with pytest.raises(ConfigurationError):
            SiteConfig(locales=("en", "en"))

    def test_unknown_mode(self) -> None:
        with pytest.raises(ConfigurationError, match="mode"):
            SiteConfig(mode="fancy")  # type: ignore[arg-type]

    def test_empty_hidden_prefix(self) -> None:
        with pytest.raises(ConfigurationError):
            SiteConfig(hidden_prefix="")

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ConfigurationError):
            SiteConfig(timeout=0)

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ConfigurationError):
            SiteConfig(log_level="loud")


class TestLocaleRefs:
    def test_ref_for_override(self) -> None:
        cfg = SiteConfig(locales=("en", "pt-BR"), ref="main", locale_refs=(("pt-BR", "main-pt"),))
        assert cfg.ref_for("pt-BR") == "main-pt"
        assert cfg.ref_for("en") == "main"

    def test_ref_for_without_refs(self) -> None:
        assert SiteConfig().ref_for("en") is None

    def test_unknown_locale(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown locale"):
            SiteConfig(locales=("en",), locale_refs=(("pt-BR", "main-pt"),))

    def test_duplicate_locale(self) -> None:
        with pytest.raises(ConfigurationError):
            SiteConfig(locales=("en", "pt-BR"), locale_refs=(("pt-BR", "a"), ("pt-BR", "b")))
