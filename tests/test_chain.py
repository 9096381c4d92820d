"""Tests for quire.rendering.chain — folding over declines and hard failures."""

import io

import pytest

from quire.errors import ConfigurationError, ContentError, Declined, NotFound
from quire.rendering import Chain, Rendered, write_to
from quire.rendering.protocol import ALL_KINDS, DIRECTORIES, DOCUMENTS
from quire.sources import Document, NodeKind
from quire.sources.nodes import Directory, Node


class FakeRenderer:
    """Scripted renderer: declines, fails, or succeeds, and records calls."""

    terminal = False

    def __init__(
        self,
        name: str,
        outcome: str,
        calls: list[str],
        accepts: frozenset[NodeKind] = ALL_KINDS,
    ) -> None:
        self.name = name
        self.outcome = outcome
        self.calls = calls
        self.accepts = accepts

    def render(self, node: Node) -> Rendered:
        self.calls.append(self.name)
        if self.outcome == "decline":
            raise Declined(self.name, node.path)
        if self.outcome == "fail":
            raise ContentError("malformed", path=node.path)
        return Rendered(body=self.name.encode(), content_type="text/plain", renderer=self.name, path=node.path)


def _doc(path: str = "post.md") -> Document:
    return Document(path, lambda: b"body")


class TestFold:
    def test_first_success_after_declines(self) -> None:
        calls: list[str] = []
        chain = Chain(
            "fold",
            [
                FakeRenderer("a", "decline", calls),
                FakeRenderer("b", "decline", calls),
                FakeRenderer("c", "ok", calls),
            ],
        )
        result = chain.render(_doc())
        assert result.body == b"c"
        assert result.renderer == "c"
        assert calls == ["a", "b", "c"]

    def test_hard_failure_stops_fold(self) -> None:
        calls: list[str] = []
        chain = Chain(
            "fold",
            [
                FakeRenderer("a", "decline", calls),
                FakeRenderer("b", "fail", calls),
                FakeRenderer("c", "ok", calls),
            ],
        )
        with pytest.raises(ContentError) as exc_info:
            chain.render(_doc())
        assert calls == ["a", "b"]
        assert exc_info.value.renderer == "b"
        assert "raised in renderer 'b'" in exc_info.value.__notes__

    def test_error_propagates_unchanged(self) -> None:
        original = NotFound("post.md")

        class Raiser(FakeRenderer):
            def render(self, node: Node) -> Rendered:
                raise original

        chain = Chain("fold", [Raiser("r", "ok", [])])
        with pytest.raises(NotFound) as exc_info:
            chain.render(_doc())
        assert exc_info.value is original

    def test_all_decline_declines(self) -> None:
        calls: list[str] = []
        chain = Chain("fold", [FakeRenderer("a", "decline", calls), FakeRenderer("b", "decline", calls)])
        with pytest.raises(Declined) as exc_info:
            chain.render(_doc())
        assert exc_info.value.renderer == "fold"
        assert calls == ["a", "b"]

    def test_first_match_wins(self) -> None:
        calls: list[str] = []
        chain = Chain("fold", [FakeRenderer("a", "ok", calls), FakeRenderer("b", "ok", calls)])
        assert chain.render(_doc()).renderer == "a"
        assert calls == ["a"]

    def test_unsupported_kind_declines_without_trying_children(self) -> None:
        calls: list[str] = []
        chain = Chain("docs", [FakeRenderer("a", "ok", calls, accepts=DOCUMENTS)])
        with pytest.raises(Declined):
            chain.render(Directory("", []))
        assert calls == []


class TestNesting:
    def test_inner_decline_is_retried_by_outer(self) -> None:
        calls: list[str] = []
        inner = Chain("inner", [FakeRenderer("a", "decline", calls)])
        outer = Chain("outer", [inner, FakeRenderer("b", "ok", calls)])
        assert outer.render(_doc()).renderer == "b"
        assert calls == ["a", "b"]

    def test_inner_failure_aborts_outer(self) -> None:
        calls: list[str] = []
        inner = Chain("inner", [FakeRenderer("a", "fail", calls)])
        outer = Chain("outer", [inner, FakeRenderer("b", "ok", calls)])
        with pytest.raises(ContentError) as exc_info:
            outer.render(_doc())
        assert calls == ["a"]
        # The innermost renderer keeps the attribution
        assert exc_info.value.renderer == "a"

    def test_accepts_is_union(self) -> None:
        chain = Chain(
            "mixed",
            [FakeRenderer("d", "ok", [], accepts=DIRECTORIES), FakeRenderer("f", "ok", [], accepts=DOCUMENTS)],
        )
        assert chain.accepts == ALL_KINDS


class TestConfiguration:
    def test_empty_chain(self) -> None:
        with pytest.raises(ConfigurationError, match="no renderers"):
            Chain("empty", [])

    def test_duplicate_names(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate"):
            Chain("fold", [FakeRenderer("a", "ok", []), FakeRenderer("a", "ok", [])])

    def test_duplicate_names_across_nesting(self) -> None:
        inner = Chain("inner", [FakeRenderer("a", "ok", [])])
        with pytest.raises(ConfigurationError):
            Chain("outer", [inner, FakeRenderer("a", "ok", [])])

    def test_chain_name_clashes_with_child(self) -> None:
        with pytest.raises(ConfigurationError):
            Chain("a", [FakeRenderer("a", "ok", [])])

    def test_terminal_when_any_child_is(self) -> None:
        terminal = FakeRenderer("t", "ok", [])
        terminal.terminal = True  # type: ignore[misc]
        assert Chain("c", [FakeRenderer("a", "ok", []), terminal]).terminal
        assert not Chain("d", [FakeRenderer("b", "ok", [])]).terminal


class TestWriteTo:
    def test_writes_after_success(self) -> None:
        sink = io.BytesIO()
        write_to(FakeRenderer("a", "ok", []), _doc(), sink)
        assert sink.getvalue() == b"a"

    def test_sink_untouched_on_failure(self) -> None:
        sink = io.BytesIO()
        with pytest.raises(ContentError):
            write_to(FakeRenderer("a", "fail", []), _doc(), sink)
        assert sink.getvalue() == b""
