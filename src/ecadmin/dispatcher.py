"""Top-level command dispatch."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from .commands import run_command
from .config import GENERIC_USAGE, AdminConfig
from .constants import COMMAND_PREFIX, EXIT_INVALID_ARGUMENT, EXIT_USAGE
from .errors import InvalidArgumentError, UnknownCommandError
from .logging_utils import log_event
from .namespace import Connector
from .presenters import prettify_error
from .registry import render_usage, resolve_command


def run(argv: Sequence[str], config: AdminConfig, connect: Connector) -> int:
    """Resolve ``argv[0]`` to a registered command and run it.

    Returns the command's exit status, 1 when no command could be resolved,
    or -1 when the command raised InvalidArgumentError.
    """
    if not argv:
        _print_catalog()
        return EXIT_USAGE

    name = argv[0]
    try:
        spec = resolve_command(name)
    except UnknownCommandError as exc:
        print(str(exc), file=sys.stderr)
        if not name.startswith(COMMAND_PREFIX):
            print("Command names must start with dashes.", file=sys.stderr)
        _print_catalog()
        return EXIT_USAGE

    args = list(argv[1:])
    log_event("command_start", command=spec.name, args=args)
    try:
        status = run_command(spec, args, config, connect)
    except InvalidArgumentError as exc:
        log_event(
            "invalid_argument",
            level=logging.WARNING,
            command=spec.name,
            error=str(exc),
        )
        print(prettify_error(exc), file=sys.stderr)
        status = EXIT_INVALID_ARGUMENT

    log_event("command_finish", command=spec.name, status=status)
    return status


def _print_catalog() -> None:
    print(render_usage(long_usage=False), file=sys.stderr)
    print(file=sys.stderr)
    print(GENERIC_USAGE, file=sys.stderr)
