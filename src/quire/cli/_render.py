"""``quire render`` and ``quire ls`` — one-shot renders against a source.

Both commands build a site from the command-line flags, render one path,
and exit 1 with a single-line message on any quire error.
"""

import argparse
import logging
import sys

from quire.config import SiteConfig
from quire.errors import ConfigurationError, QuireError
from quire.site import Site, build_site


def config_from_args(args: argparse.Namespace, *, raw: bool = False) -> SiteConfig:
    """Translate parsed CLI flags into a ``SiteConfig``."""
    locale_refs = tuple(_split_locale_ref(item) for item in args.locale_ref)
    locales = (args.lang or "en",)
    locales += tuple(lang for lang, _ in locale_refs if lang not in locales)
    return SiteConfig(
        endpoint=args.endpoint or "",
        owner=args.owner or "",
        repo=args.repo or "",
        ref=args.ref,
        locale_refs=locale_refs,
        root=args.root,
        timeout=args.timeout,
        local_dir=args.local,
        locales=locales,
        mode="raw" if raw else "render",
        log_level="debug" if args.verbose else "warning",
    )


def _split_locale_ref(item: str) -> tuple[str, str]:
    lang, sep, ref = item.partition("=")
    if not sep or not lang or not ref:
        msg = f"--locale-ref expects LANG=REF, got {item!r}"
        raise ConfigurationError(msg)
    return lang, ref


def _setup(args: argparse.Namespace, *, raw: bool = False) -> Site:
    try:
        config = config_from_args(args, raw=raw)
        logging.basicConfig(
            level=config.log_level.upper(),
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        return build_site(config)
    except QuireError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def run_render(args: argparse.Namespace) -> None:
    """Render ``args.path`` and write the body to stdout."""
    with _setup(args, raw=args.raw) as site:
        try:
            result = site.render_path(args.path, lang=args.lang)
        except QuireError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc

    if args.show_meta:
        print(f"renderer: {result.renderer}", file=sys.stderr)
        print(f"content-type: {result.content_type}", file=sys.stderr)
        if result.title is not None:
            print(f"title: {result.title}", file=sys.stderr)
        for key, value in result.metadata.items():
            print(f"{key}: {value}", file=sys.stderr)

    sys.stdout.buffer.write(result.body)
    sys.stdout.flush()


def run_ls(args: argparse.Namespace) -> None:
    """Print the visible entries of a directory in natural order."""
    with _setup(args) as site:
        try:
            result = site.render_path(args.path, lang=args.lang)
        except QuireError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc

    if result.renderer != "listing":
        print(f"Error: /{result.path} is not a directory", file=sys.stderr)
        raise SystemExit(1)

    for entry in result.entries:
        print(entry.name + ("/" if entry.is_dir else ""))
