"""CLI entry and startup wiring."""

from __future__ import annotations

import sys

from .config import GENERIC_USAGE, load_config, parse_generic_options
from .constants import EXIT_USAGE
from .dispatcher import run
from .errors import ConfigError
from .logging_utils import setup_logging
from .namespace import connect_namespace
from .store import JsonNamespaceStore


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    try:
        generic, remaining = parse_generic_options(args)
        config = load_config(generic.conf_path, generic.overrides)
        setup_logging(config.log_file)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        print(GENERIC_USAGE, file=sys.stderr)
        return EXIT_USAGE

    connect = connect_namespace(config.default_fs, JsonNamespaceStore(config.state_file))
    return run(remaining, config, connect)
