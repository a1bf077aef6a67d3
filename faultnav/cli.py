"""Command-line front door for faultnav.

Parses CLI options, picks a data source, and drives one navigation session:
load the root collection, apply expansions, activation and search, then print
the resulting tree through the terminal renderer.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shutil
import sys
from pathlib import Path

from . import config
from .data_source import DataSource, FileDataSource, HttpDataSource
from .errors import CliError
from .navigator import NavigatorSession
from .render import TerminalRenderer, available_theme_names, highlight_descriptor_json, resolve_theme

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
PATH_SEPARATOR = ">"

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def split_title_path(value: str) -> list[str]:
    """Split ``"A > B > C"`` into titles; titles themselves may contain ``/``."""
    titles = [part.strip() for part in value.split(PATH_SEPARATOR)]
    if not titles or any(not title for title in titles):
        raise CliError(f"Invalid node path: {value!r}")
    return titles


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_data_source(data_dir: str | None, base_url: str | None, timeout: float) -> DataSource:
    """Choose the HTTP source when a base URL is given, otherwise local files."""
    if base_url:
        return HttpDataSource(base_url, timeout=timeout)
    path = Path(data_dir) if data_dir else config.load_data_dir()
    return FileDataSource(path)


def persist_settings(args: argparse.Namespace) -> None:
    """Write the explicitly given source and theme options to the config file."""
    if args.data_dir is not None:
        config.save_data_dir(Path(args.data_dir).expanduser().resolve())
    if args.base_url is not None:
        config.save_base_url(args.base_url)
    if args.theme is not None:
        config.save_theme_name(args.theme)


async def run_session(session: NavigatorSession, renderer: TerminalRenderer, args: argparse.Namespace) -> str:
    """Replay CLI actions against ``session`` and return the text to print."""
    await session.load_root()
    if session.used_fallback:
        logger.warning("showing built-in root collection")

    for raw_path in args.expand:
        try:
            await session.expand_path(split_title_path(raw_path))
        except LookupError as exc:
            raise CliError(f"Cannot expand {raw_path!r}: {exc}") from exc

    if args.open is not None:
        titles = split_title_path(args.open)
        try:
            if len(titles) > 1:
                await session.expand_path(titles[:-1])
        except LookupError as exc:
            raise CliError(f"Cannot open {args.open!r}: {exc}") from exc
        node = session.find(titles)
        if node is None:
            raise CliError(f"Node not found: {args.open}")
        await session.activate(node)

    if args.search:
        session.set_filter(args.search)

    if args.json:
        active = session.active_node
        if active is None:
            raise CliError("--json requires --open")
        return highlight_descriptor_json(active.descriptor, args.style, args.no_color)
    return renderer.render()


async def _run(data_source: DataSource, session: NavigatorSession, renderer: TerminalRenderer, args) -> str:
    try:
        return await run_session(session, renderer, args)
    finally:
        if isinstance(data_source, HttpDataSource):
            await data_source.close()


def main(default_data_dir: Path | None = None) -> None:
    """Parse CLI arguments and print the navigated fault tree.

    ``default_data_dir`` is primarily for tests; when omitted the configured
    data directory is used.
    """
    parser = argparse.ArgumentParser(description="Browse a fault-diagnosis knowledge tree in the terminal.")
    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument("--data-dir", default=None, help="Directory holding JSON collections.")
    source_group.add_argument("--base-url", default=None, help="Fetch JSON collections over HTTP from this URL.")
    parser.add_argument("--root-source", default=None, help="Source id of the root collection (default: main).")
    parser.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="PATH",
        help=f"Expand folders along PATH (titles joined by '{PATH_SEPARATOR}'). Repeatable.",
    )
    parser.add_argument("--open", default=None, metavar="PATH", help="Activate the node at PATH.")
    parser.add_argument("--search", default=None, metavar="KEYWORD", help="Filter loaded nodes by title.")
    parser.add_argument("--json", action="store_true", help="Print the active node's descriptor as JSON.")
    parser.add_argument("--style", default="monokai", help="Pygments style name for --json output.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--max-cols", type=_positive_int, default=None, help="Clip output to this width.")
    parser.add_argument("--verbose", action="store_true", help="Log fetches and state transitions.")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Remember --data-dir, --base-url and --theme as defaults.",
    )
    args = parser.parse_args()

    configure_logging(args.verbose)
    if args.save:
        persist_settings(args)

    data_dir: str | None = args.data_dir
    base_url: str | None = args.base_url
    if data_dir is None and base_url is None:
        if default_data_dir is not None:
            data_dir = str(default_data_dir)
        else:
            base_url = config.load_base_url()

    data_source = build_data_source(data_dir, base_url, config.load_fetch_timeout())
    no_color = args.no_color or not sys.stdout.isatty()
    separator = config.load_breadcrumb_separator()
    renderer = TerminalRenderer(
        theme=resolve_theme(args.theme or config.load_theme_name(), no_color=no_color),
        breadcrumb_separator=separator,
        max_cols=args.max_cols if args.max_cols is not None else (None if no_color else _default_render_width()),
    )
    session = NavigatorSession(
        data_source,
        root_source=args.root_source or config.load_root_source(),
        renderer=renderer,
        breadcrumb_separator=separator,
    )
    args.no_color = no_color
    try:
        output = asyncio.run(_run(data_source, session, renderer, args))
    except CliError as exc:
        raise SystemExit(str(exc)) from exc
    sys.stdout.write(output)


if __name__ == "__main__":
    main()
