"""Policy command execution.

Every command goes through ``run_command``: usage errors become status 1,
namespace failures become status 2. InvalidArgumentError is left for the
dispatcher.
"""

from __future__ import annotations

import logging
import sys

from .command_parser import (
    GetPolicyCommand,
    HelpCommand,
    ListPoliciesCommand,
    ParsedCommand,
    SetPolicyCommand,
    UnsetPolicyCommand,
    parse_command,
)
from .config import AdminConfig
from .constants import COMMAND_PREFIX, EXIT_NAMESPACE_ERROR, EXIT_OK, EXIT_USAGE
from .errors import (
    CommandUsageError,
    MissingOptionError,
    NamespaceError,
    TooManyArgumentsError,
    UnknownCommandError,
)
from .logging_utils import log_event
from .namespace import Connector
from .paths import NamespacePath
from .presenters import (
    prettify_error,
    render_policy_lines,
    render_set_confirmation,
    render_unset_confirmation,
    render_unspecified,
)
from .registry import CommandSpec, command_names, render_usage, resolve_command


def run_command(
    spec: CommandSpec,
    args: list[str],
    config: AdminConfig,
    connect: Connector,
) -> int:
    """Parse and execute one command, returning its exit status."""
    try:
        command = parse_command(spec, args, working_dir=config.working_dir)
    except MissingOptionError as exc:
        _print_err(f"{exc.hint}\nUsage: {spec.long_usage}")
        return EXIT_USAGE
    except TooManyArgumentsError:
        _print_err(f"{spec.name}: Too many arguments")
        return EXIT_USAGE
    except CommandUsageError as exc:
        _print_err(str(exc))
        return EXIT_USAGE

    return execute(command, connect)


def execute(command: ParsedCommand, connect: Connector) -> int:
    match command:
        case ListPoliciesCommand():
            return _list_policies(connect)
        case GetPolicyCommand(path=path):
            return _get_policy(path, connect)
        case SetPolicyCommand(path=path, policy_name=policy_name):
            return _set_policy(path, policy_name, connect)
        case UnsetPolicyCommand(path=path):
            return _unset_policy(path, connect)
        case HelpCommand(topic=topic):
            return _help(topic)
    raise TypeError(f"Unsupported command: {command!r}")


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _list_policies(connect: Connector) -> int:
    service = connect(None)
    try:
        policies = service.list_policies()
    except NamespaceError as exc:
        return _namespace_failure("list_policies", None, exc)

    names = [policy.name for policy in policies if policy is not None]
    for line in render_policy_lines(names):
        print(line)
    return EXIT_OK


def _get_policy(path: NamespacePath, connect: Connector) -> int:
    service = connect(path)
    try:
        policy = service.get_effective_policy(path)
    except NamespaceError as exc:
        return _namespace_failure("get_policy", path, exc)

    if policy is not None:
        print(policy.name)
    else:
        print(render_unspecified(str(path)))
    return EXIT_OK


def _set_policy(path: NamespacePath, policy_name: str, connect: Connector) -> int:
    service = connect(path)
    try:
        service.set_policy(path, policy_name)
    except NamespaceError as exc:
        return _namespace_failure("set_policy", path, exc)

    log_event("policy_set", path=str(path), policy=policy_name)
    print(render_set_confirmation(policy_name, str(path)))
    return EXIT_OK


def _unset_policy(path: NamespacePath, connect: Connector) -> int:
    service = connect(path)
    try:
        service.unset_policy(path)
    except NamespaceError as exc:
        return _namespace_failure("unset_policy", path, exc)

    log_event("policy_unset", path=str(path))
    print(render_unset_confirmation(str(path)))
    return EXIT_OK


def _help(topic: str | None) -> int:
    if topic is None:
        _print_err(render_usage(long_usage=True))
        return EXIT_OK

    try:
        spec = resolve_command(COMMAND_PREFIX + topic.lstrip(COMMAND_PREFIX))
    except UnknownCommandError:
        valid_names = ", ".join(name.lstrip(COMMAND_PREFIX) for name in command_names())
        _print_err(f"Unknown command '{topic}'.\nValid help command names are:\n{valid_names}")
        return EXIT_USAGE

    print(spec.long_usage)
    return EXIT_OK


def _namespace_failure(
    operation: str,
    path: NamespacePath | None,
    exc: NamespaceError,
) -> int:
    log_event(
        "namespace_call_failed",
        level=logging.WARNING,
        operation=operation,
        path=str(path) if path is not None else None,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    _print_err(prettify_error(exc))
    return EXIT_NAMESPACE_ERROR


def _print_err(text: str) -> None:
    print(text, file=sys.stderr)
