"""
Command line entry point: ``remote-theme [options] THEME...``

Prints ``owner/name<TAB>root`` for every resolved theme.
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from typing import List, Optional

from remotetheme.remotetheme_config import (
    EXTRACTOR_BUILTIN,
    VERSION,
    RemoteThemeConfig,
)
from remotetheme.remotetheme_exceptions import RemoteThemeException
from remotetheme.remotetheme_logger import RemoteThemeLogger
from remotetheme.theme_resolver import ThemeResolver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="remote-theme",
        description="Download and extract remote themes (owner/name[@ref]).",
    )
    parser.add_argument("themes", nargs="+", metavar="THEME")
    parser.add_argument("--config", help="TOML configuration file")
    parser.add_argument(
        "--timeout", type=float, help="Network timeout in seconds"
    )
    parser.add_argument(
        "--builtin-extractor",
        action="store_true",
        help="Extract in-process instead of running unzip",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def load_config(args: argparse.Namespace) -> RemoteThemeConfig:
    config = RemoteThemeConfig.load(args.config) if args.config else RemoteThemeConfig.from_dict({})
    overrides = {}
    if args.timeout is not None:
        overrides["network_timeout"] = args.timeout
    if args.builtin_extractor:
        overrides["extractor"] = EXTRACTOR_BUILTIN
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args)
        resolver = ThemeResolver(config, RemoteThemeLogger())
        if len(args.themes) == 1:
            themes = [resolver.resolve(args.themes[0])]
        else:
            themes = asyncio.run(resolver.resolve_all(args.themes))
    except RemoteThemeException as e:
        print(f"remote-theme: {e}", file=sys.stderr)
        return 1

    for theme in themes:
        print(f"{theme.name_with_owner}\t{theme.root}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
