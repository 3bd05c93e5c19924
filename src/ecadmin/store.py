"""JSON state file persistence for the local namespace service."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from .errors import NamespaceUnavailableError
from .logging_utils import log_event
from .models import ErasureCodingPolicy, NamespaceState
from .namespace import InMemoryNamespace
from .paths import NamespacePath


def load_state(path: Path) -> NamespaceState:
    """Load namespace state from JSON. Returns the default state if the file does not exist."""
    if not path.exists():
        return NamespaceState()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise NamespaceUnavailableError(f"Could not read namespace state: {path}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise NamespaceUnavailableError(f"Invalid namespace state JSON: {path}") from exc

    try:
        return NamespaceState.model_validate(data)
    except ValidationError as exc:
        raise NamespaceUnavailableError(f"Invalid namespace state: {path}") from exc


def save_state(state: NamespaceState, path: Path) -> None:
    """Serialize state to JSON and write it to path.

    Uses indent=2 and preserves field declaration order.
    Creates parent directories if needed.
    Appends a trailing newline.
    """
    data = state.model_dump(mode="json")
    text = json.dumps(data, indent=2, ensure_ascii=False)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        raise NamespaceUnavailableError(f"Could not write namespace state: {path}") from exc
    log_event("namespace_state_saved", state_file=path)


class JsonNamespaceStore:
    """Namespace service backed by a JSON state file.

    State is loaded on every call and saved after each successful mutation.
    """

    def __init__(self, state_path: Path) -> None:
        self.state_path = state_path

    def list_policies(self) -> list[ErasureCodingPolicy | None]:
        return self._open().list_policies()

    def get_effective_policy(self, path: NamespacePath) -> ErasureCodingPolicy | None:
        return self._open().get_effective_policy(path)

    def set_policy(self, path: NamespacePath, policy_name: str) -> None:
        namespace = self._open()
        namespace.set_policy(path, policy_name)
        save_state(namespace.state, self.state_path)

    def unset_policy(self, path: NamespacePath) -> None:
        namespace = self._open()
        namespace.unset_policy(path)
        save_state(namespace.state, self.state_path)

    def _open(self) -> InMemoryNamespace:
        return InMemoryNamespace(load_state(self.state_path))
