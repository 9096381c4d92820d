"""Quire CLI — render and list content from the command line.

Entry point registered as ``quire`` in ``pyproject.toml``::

    [project.scripts]
    quire = "quire.cli:main"
"""

import argparse
import sys


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", nargs="?", default="/", help="Content path (default: root)")
    parser.add_argument("--lang", default=None, help="Locale to render with")
    parser.add_argument("--local", default=None, metavar="DIR", help="Local checkout of the content repository")
    parser.add_argument("--endpoint", default=None, help="Forgejo/Gitea API base URL")
    parser.add_argument("--owner", default=None, help="Repository owner")
    parser.add_argument("--repo", default=None, help="Repository name")
    parser.add_argument("--ref", default=None, help="Branch, tag, or commit")
    parser.add_argument(
        "--locale-ref",
        action="append",
        default=[],
        metavar="LANG=REF",
        help="Read LANG from its own branch, tag, or commit (repeatable)",
    )
    parser.add_argument("--root", default="blog", help="Content directory inside the repository")
    parser.add_argument("--timeout", type=float, default=10.0, help="Request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``quire`` command."""
    parser = argparse.ArgumentParser(
        prog="quire",
        description="Quire — render a remote content repository as a small website.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- quire render -----------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render a path to stdout")
    _add_source_arguments(render_parser)
    render_parser.add_argument(
        "--raw",
        action="store_true",
        help="Serve source bytes untouched (no Markdown, no listings)",
    )
    render_parser.add_argument(
        "--show-meta",
        action="store_true",
        help="Print renderer, title, and metadata to stderr",
    )

    # -- quire ls ---------------------------------------------------------
    ls_parser = subparsers.add_parser("ls", help="List a directory in natural order")
    _add_source_arguments(ls_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "render":
        from quire.cli._render import run_render

        run_render(args)
    elif args.command == "ls":
        from quire.cli._render import run_ls

        run_ls(args)
