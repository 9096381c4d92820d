"""Quire exception hierarchy.

Shared across sources, renderers, chains, and the dispatcher so every
module raises and catches the same types.

Three families matter to callers:

- ``Declined`` — a renderer does not apply to the node. Folding
  renderers retry the next child; it never reaches the caller.
- ``ContentError`` — the node was accepted but its content is
  malformed. Aborts any enclosing fold.
- ``SourceError`` — the content source could not produce the node
  (``NotFound``, ``TransientFetchError``, ``MalformedResponse``).
"""


class QuireError(Exception):
    """Base for all quire-specific errors."""


class ConfigurationError(QuireError):
    """Raised when a chain or site configuration is invalid.

    Raised at construction time, never per request.
    """


class Declined(QuireError):  # noqa: N818
    """A renderer does not support this node shape."""

    def __init__(self, renderer: str, path: str = "", reason: str = "") -> None:
        self.renderer = renderer
        self.path = path
        self.reason = reason
        detail = f"{renderer} declined /{path}"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)


class ContentError(QuireError):
    """The node was accepted but its content could not be rendered."""

    def __init__(self, detail: str, *, path: str = "", renderer: str | None = None) -> None:
        self.detail = detail
        self.path = path
        self.renderer = renderer
        super().__init__(detail)

    def __str__(self) -> str:
        prefix = f"[{self.renderer}] " if self.renderer else ""
        where = f" ({self.path})" if self.path else ""
        return f"{prefix}{self.detail}{where}"


class SourceError(QuireError):
    """The content source failed to produce a node."""

    def __init__(self, detail: str, *, path: str = "") -> None:
        self.detail = detail
        self.path = path
        self.renderer: str | None = None
        super().__init__(detail)


class NotFound(SourceError):  # noqa: N818
    """No node exists at the requested path."""

    def __init__(self, path: str, detail: str = "") -> None:
        super().__init__(detail or f"Not Found: /{path}", path=path)


class TransientFetchError(SourceError):
    """Network or backend failure; the same request may succeed later."""


class MalformedResponse(SourceError):
    """The backend answered with something that is not a valid node."""


class DocumentConsumedError(SourceError):
    """A document stream was read more than once."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Document already read: /{path}", path=path)
