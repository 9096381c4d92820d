"""Quire — render a remote content repository as a small website.

Fetches nodes (directories and documents) from a content source, picks a
renderer through a folding chain, and hands back complete results:
Markdown pages with titles and metadata, naturally ordered directory
indices, or raw passthrough.

Basic usage::

    from quire import SiteConfig, build_site

    site = build_site(SiteConfig(
        endpoint="https://forge.example.com/api/v1",
        owner="team",
        repo="website",
        root="blog",
    ))
    page = site.render_path("2024/hello.md")
    page.title, page.body

Local preview::

    site = build_site(SiteConfig(local_dir="~/src/website"))
"""

__version__ = "0.1.0"
__all__ = [
    "Chain",
    "ConfigurationError",
    "ContentError",
    "Declined",
    "Dispatcher",
    "FileSystemSource",
    "ForgejoSource",
    "MalformedResponse",
    "MemorySource",
    "NotFound",
    "QuireError",
    "Rendered",
    "Site",
    "SiteConfig",
    "SourceError",
    "TransientFetchError",
    "build_site",
    "natsorted",
]

# name → module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "Chain": "quire.rendering.chain",
    "ConfigurationError": "quire.errors",
    "ContentError": "quire.errors",
    "Declined": "quire.errors",
    "Dispatcher": "quire.rendering.dispatch",
    "FileSystemSource": "quire.sources.filesystem",
    "ForgejoSource": "quire.sources.forgejo",
    "MalformedResponse": "quire.errors",
    "MemorySource": "quire.sources.memory",
    "NotFound": "quire.errors",
    "QuireError": "quire.errors",
    "Rendered": "quire.rendering.protocol",
    "Site": "quire.site",
    "SiteConfig": "quire.config",
    "SourceError": "quire.errors",
    "TransientFetchError": "quire.errors",
    "build_site": "quire.site",
    "natsorted": "quire.natsort",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import quire`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
