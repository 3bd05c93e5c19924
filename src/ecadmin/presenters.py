"""User-facing text rendering."""

from __future__ import annotations

import textwrap
from collections.abc import Sequence

from .constants import OPTION_TABLE_WIDTH

_COLUMN_GAP = "  "


def prettify_error(exc: BaseException) -> str:
    """Render an exception as one readable line without traceback detail."""
    lines = str(exc).splitlines()
    first_line = lines[0] if lines else ""
    return f"{type(exc).__name__}: {first_line}"


def render_option_table(
    rows: Sequence[tuple[str, str]],
    *,
    width: int = OPTION_TABLE_WIDTH,
) -> str:
    """Render an option name -> description table without headers.

    The name column is padded to its widest entry; descriptions are
    word-wrapped so no line exceeds ``width`` and continuation lines stay
    aligned under the description column.
    """
    if not rows:
        return ""

    name_width = max(len(name) for name, _description in rows)
    indent = " " * (name_width + len(_COLUMN_GAP))
    text_width = max(width - len(indent), 20)

    lines: list[str] = []
    for name, description in rows:
        wrapped = textwrap.wrap(description, width=text_width) or [""]
        lines.append(f"{name.ljust(name_width)}{_COLUMN_GAP}{wrapped[0]}".rstrip())
        lines.extend(f"{indent}{part}" for part in wrapped[1:])
    return "\n".join(lines)


def render_policy_lines(names: Sequence[str]) -> list[str]:
    return ["Erasure Coding Policies:", *(f"\t{name}" for name in names)]


def render_unspecified(path: str) -> str:
    return f"The erasure coding policy of {path} is unspecified"


def render_set_confirmation(policy_name: str, path: str) -> str:
    return f"Set erasure coding policy {policy_name} on {path}"


def render_unset_confirmation(path: str) -> str:
    return f"Unset erasure coding policy from {path}"
