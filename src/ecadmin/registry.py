"""Command registry: names, usage text, and option specs.

Registry order is display order in the usage catalog.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .constants import APP_NAME, CATALOG_INDENT
from .errors import UnknownCommandError
from .options import OptionSpec
from .presenters import render_option_table


class CommandName(StrEnum):
    LIST_POLICIES = "-listPolicies"
    GET_POLICY = "-getPolicy"
    SET_POLICY = "-setPolicy"
    UNSET_POLICY = "-unsetPolicy"
    HELP = "-help"


@dataclass(frozen=True)
class CommandSpec:
    name: CommandName
    synopsis: str
    description: str
    options: tuple[OptionSpec, ...] = ()
    option_rows: tuple[tuple[str, str], ...] = ()

    @property
    def short_usage(self) -> str:
        if self.synopsis:
            return f"[{self.name} {self.synopsis}]"
        return f"[{self.name}]"

    @property
    def long_usage(self) -> str:
        lines = [self.short_usage, "", self.description]
        if self.option_rows:
            lines.append("")
            lines.append(render_option_table(self.option_rows))
        return "\n".join(lines)


COMMAND_REGISTRY: tuple[CommandSpec, ...] = (
    CommandSpec(
        name=CommandName.LIST_POLICIES,
        synopsis="",
        description="Get the list of supported erasure coding policies.",
    ),
    CommandSpec(
        name=CommandName.GET_POLICY,
        synopsis="-path <path>",
        description="Get the erasure coding policy of a file/directory.",
        options=(OptionSpec("-path", missing_hint="Please specify the path with -path."),),
        option_rows=(
            ("<path>", "The path of the file/directory for getting the erasure coding policy"),
        ),
    ),
    CommandSpec(
        name=CommandName.SET_POLICY,
        synopsis="-path <path> -policy <policy>",
        description="Set the erasure coding policy for a file/directory.",
        options=(
            OptionSpec(
                "-path",
                missing_hint="Please specify the path for setting the EC policy.",
            ),
            OptionSpec("-policy", missing_hint="Please specify the policy name."),
        ),
        option_rows=(
            ("<path>", "The path of the file/directory to set the erasure coding policy"),
            ("<policy>", "The name of the erasure coding policy"),
        ),
    ),
    CommandSpec(
        name=CommandName.UNSET_POLICY,
        synopsis="-path <path>",
        description="Unset the erasure coding policy for a directory.",
        options=(OptionSpec("-path", missing_hint="Please specify a path."),),
        option_rows=(
            (
                "<path>",
                "The path of the directory from which the erasure coding policy will be unset.",
            ),
        ),
    ),
    CommandSpec(
        name=CommandName.HELP,
        synopsis="<command-name>",
        description="Get detailed help about a command.",
        option_rows=(
            (
                "<command-name>",
                "The command for which to get detailed help. If no command is "
                "specified, print detailed help for all commands.",
            ),
        ),
    ),
)


def resolve_command(name: str) -> CommandSpec:
    """Return the command registered under exactly ``name`` (case-sensitive)."""
    for spec in COMMAND_REGISTRY:
        if spec.name == name:
            return spec
    raise UnknownCommandError(name)


def command_names() -> list[str]:
    return [str(spec.name) for spec in COMMAND_REGISTRY]


def render_usage(*, long_usage: bool = False) -> str:
    """Render the command catalog: short usages, or every long usage."""
    lines = [f"Usage: {APP_NAME} [COMMAND]"]
    for spec in COMMAND_REGISTRY:
        if long_usage:
            lines.append(spec.long_usage)
            lines.append("")
        else:
            lines.append(f"{CATALOG_INDENT}{spec.short_usage}")
    return "\n".join(lines).rstrip("\n")
