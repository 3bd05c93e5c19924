"""Command parsing: argument lists to typed command variants."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_WORKING_DIR
from .errors import CommandUsageError
from .options import parse_options
from .paths import NamespacePath, parse_path
from .registry import CommandName, CommandSpec


@dataclass(frozen=True)
class ParsedCommand:
    pass


@dataclass(frozen=True)
class ListPoliciesCommand(ParsedCommand):
    pass


@dataclass(frozen=True)
class GetPolicyCommand(ParsedCommand):
    path: NamespacePath


@dataclass(frozen=True)
class SetPolicyCommand(ParsedCommand):
    path: NamespacePath
    policy_name: str


@dataclass(frozen=True)
class UnsetPolicyCommand(ParsedCommand):
    path: NamespacePath


@dataclass(frozen=True)
class HelpCommand(ParsedCommand):
    topic: str | None


def parse_command(
    spec: CommandSpec,
    args: list[str],
    *,
    working_dir: str = DEFAULT_WORKING_DIR,
) -> ParsedCommand:
    """Validate ``args`` against ``spec`` and build the matching variant.

    Raises CommandUsageError subclasses for missing or extra options and
    InvalidArgumentError for malformed values.
    """
    if spec.name == CommandName.HELP:
        return _parse_help(args)

    values = parse_options(spec.options, args)
    match spec.name:
        case CommandName.LIST_POLICIES:
            return ListPoliciesCommand()
        case CommandName.GET_POLICY:
            return GetPolicyCommand(path=_path_value(values["-path"], working_dir))
        case CommandName.SET_POLICY:
            return SetPolicyCommand(
                path=_path_value(values["-path"], working_dir),
                policy_name=str(values["-policy"]),
            )
        case CommandName.UNSET_POLICY:
            return UnsetPolicyCommand(path=_path_value(values["-path"], working_dir))
    raise CommandUsageError(f"No parser for command '{spec.name}'")


def _parse_help(args: list[str]) -> HelpCommand:
    if not args:
        return HelpCommand(topic=None)
    if len(args) != 1:
        raise CommandUsageError("You must give exactly one argument to -help.")
    return HelpCommand(topic=args[0])


def _path_value(value: str | bool | None, working_dir: str) -> NamespacePath:
    return parse_path(str(value), working_dir=working_dir)
