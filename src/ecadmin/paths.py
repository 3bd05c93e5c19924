"""Namespace path parsing and normalization."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from urllib.parse import urlsplit

from .constants import DEFAULT_WORKING_DIR
from .errors import InvalidArgumentError

SEPARATOR = "/"
_SCHEME_MARKER = "://"


@dataclass(frozen=True)
class NamespacePath:
    """An absolute, normalized location in the namespace.

    ``scheme`` and ``authority`` stay empty when the user gave a bare path.
    """

    path: str
    scheme: str = ""
    authority: str = ""

    def __str__(self) -> str:
        if self.scheme:
            return f"{self.scheme}{_SCHEME_MARKER}{self.authority}{self.path}"
        return self.path

    @property
    def is_root(self) -> bool:
        return self.path == SEPARATOR

    @property
    def parent(self) -> NamespacePath | None:
        if self.is_root:
            return None
        head = self.path.rsplit(SEPARATOR, 1)[0]
        return NamespacePath(head or SEPARATOR, self.scheme, self.authority)

    def lineage(self) -> Iterator[NamespacePath]:
        """Yield this path, then each ancestor up to and including the root."""
        current: NamespacePath | None = self
        while current is not None:
            yield current
            current = current.parent


def parse_path(raw: str, *, working_dir: str = DEFAULT_WORKING_DIR) -> NamespacePath:
    """Parse a user-supplied path or URI into a NamespacePath.

    Resolution rules:
    1. Reject empty input and NUL characters.
    2. If the text starts with ``scheme://``, split off scheme and authority.
       Query strings and fragments are rejected.
    3. Relative paths are joined onto ``working_dir``.
    4. Empty and ``.`` segments are dropped, ``..`` pops one segment.
       Climbing above the root is rejected.
    """
    if not raw:
        raise InvalidArgumentError("Can not create a Path from an empty string")
    if "\0" in raw:
        raise InvalidArgumentError("Path contains NUL (\\0) character.")

    scheme = ""
    authority = ""
    path_text = raw
    marker = raw.find(_SCHEME_MARKER)
    if marker != -1 and SEPARATOR not in raw[:marker]:
        parts = urlsplit(raw)
        if not parts.scheme:
            raise InvalidArgumentError(f"Invalid path URI: {raw}")
        if parts.query or parts.fragment:
            raise InvalidArgumentError(f"Path must not carry a query or fragment: {raw}")
        scheme = parts.scheme
        authority = parts.netloc
        path_text = parts.path or SEPARATOR

    if not path_text.startswith(SEPARATOR):
        path_text = f"{working_dir.rstrip(SEPARATOR)}{SEPARATOR}{path_text}"

    return NamespacePath(_normalize(path_text, raw), scheme, authority)


def _normalize(path_text: str, raw: str) -> str:
    segments: list[str] = []
    for segment in path_text.split(SEPARATOR):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                raise InvalidArgumentError(f"Path escapes the namespace root: {raw}")
            segments.pop()
            continue
        segments.append(segment)
    return SEPARATOR + SEPARATOR.join(segments)
