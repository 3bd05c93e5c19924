"""Declarative option specs and the shared option parser."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .constants import OPTION_TERMINATOR
from .errors import InvalidArgumentError, MissingOptionError, TooManyArgumentsError

OptionValues = dict[str, str | bool | None]


@dataclass(frozen=True)
class OptionSpec:
    name: str
    takes_value: bool = True
    required: bool = True
    # Shown ahead of the long usage when a required option is absent
    missing_hint: str = ""


def parse_options(specs: Sequence[OptionSpec], args: Sequence[str]) -> OptionValues:
    """Extract every option in ``specs`` from ``args``.

    Options are matched by exact name in any order. Only the first occurrence
    of each option is consumed and scanning stops at ``--``. Required options
    are checked in declaration order. Whatever remains once all known options
    are removed is reported as too many arguments.

    Returns a mapping from option name to its value: the string argument for
    value-taking options, True/False for flags, None for an absent optional
    value.
    """
    remaining = list(args)
    values: OptionValues = {}

    for spec in specs:
        if spec.takes_value:
            value = _pop_option_with_argument(spec.name, remaining)
            if value is None and spec.required:
                raise MissingOptionError(spec.name, spec.missing_hint)
            values[spec.name] = value
        else:
            present = _pop_flag(spec.name, remaining)
            if not present and spec.required:
                raise MissingOptionError(spec.name, spec.missing_hint)
            values[spec.name] = present

    if remaining:
        raise TooManyArgumentsError(remaining)
    return values


def _pop_option_with_argument(name: str, args: list[str]) -> str | None:
    for index, token in enumerate(args):
        if token == OPTION_TERMINATOR:
            return None
        if token == name:
            if index + 1 >= len(args):
                raise InvalidArgumentError(f"option {name} requires 1 argument.")
            value = args[index + 1]
            del args[index:index + 2]
            return value
    return None


def _pop_flag(name: str, args: list[str]) -> bool:
    for index, token in enumerate(args):
        if token == OPTION_TERMINATOR:
            return False
        if token == name:
            del args[index]
            return True
    return False
