"""Tests for quire.cli — CLI entrypoint, argument parsing, and one-shot renders."""

import argparse
from pathlib import Path

import pytest

from quire.cli import main


@pytest.fixture
def checkout(tmp_path: Path) -> Path:
    blog = tmp_path / "blog"
    (blog / "2024").mkdir(parents=True)
    (blog / "README.md").write_text("# Readme\n", encoding="utf-8")
    (blog / "post2.md").write_text("---\ntitle: Two\ntags: x\n---\n# Heading\n", encoding="utf-8")
    (blog / "post10.md").write_text("# Ten\n", encoding="utf-8")
    (blog / "notes.txt").write_text("plain notes", encoding="utf-8")
    return tmp_path


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_render_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", "--help"])
        assert exc_info.value.code == 0

    def test_ls_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["ls", "--help"])
        assert exc_info.value.code == 0


class TestCLIBadArgs:
    def test_bad_timeout(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", "--timeout", "soon"])
        assert exc_info.value.code == 2

    def test_unknown_command(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["serve"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "quire" in captured.out


# ── render ───────────────────────────────────────────────────────────────


class TestRender:
    def test_markdown_page(self, checkout: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["render", "post10.md", "--local", str(checkout)])
        assert "<h1" in capsys.readouterr().out

    def test_show_meta(self, checkout: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["render", "post2.md", "--local", str(checkout), "--show-meta"])
        err = capsys.readouterr().err
        assert "renderer: markdown" in err
        assert "title: Two" in err
        assert "tags: x" in err

    def test_raw(self, checkout: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["render", "post10.md", "--local", str(checkout), "--raw"])
        assert capsys.readouterr().out == "# Ten\n"

    def test_missing_path_exits_one(self, checkout: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", "missing.md", "--local", str(checkout)])
        assert exc_info.value.code == 1
        assert "Not Found" in capsys.readouterr().err

    def test_no_source_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


# ── ls ───────────────────────────────────────────────────────────────────


class TestLs:
    def test_natural_order(self, checkout: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["ls", "--local", str(checkout)])
        assert capsys.readouterr().out.splitlines() == ["2024/", "notes.txt", "post2.md", "post10.md"]

    def test_document_is_not_a_directory(self, checkout: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["ls", "notes.txt", "--local", str(checkout)])
        assert exc_info.value.code == 1
        assert "not a directory" in capsys.readouterr().err


# ── locale refs ──────────────────────────────────────────────────────────


class TestLocaleRef:
    def test_config_from_flags(self) -> None:
        from quire.cli._render import config_from_args

        args = argparse.Namespace(
            endpoint="https://forge.example.com/api/v1",
            owner="team",
            repo="site",
            ref=None,
            locale_ref=["pt-BR=main-pt"],
            root="blog",
            timeout=10.0,
            local=None,
            lang=None,
            verbose=False,
        )
        cfg = config_from_args(args)
        assert cfg.locales == ("en", "pt-BR")
        assert cfg.ref_for("pt-BR") == "main-pt"
        assert cfg.ref_for("en") is None

    def test_ls_with_locale_ref(self, checkout: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["ls", "--local", str(checkout), "--lang", "pt-BR", "--locale-ref", "pt-BR=main-pt"])
        assert "post2.md" in capsys.readouterr().out.splitlines()

    def test_malformed_locale_ref_exits_one(self, checkout: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["ls", "--local", str(checkout), "--locale-ref", "main-pt"])
        assert exc_info.value.code == 1
        assert "LANG=REF" in capsys.readouterr().err
