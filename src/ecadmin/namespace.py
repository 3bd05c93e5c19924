"""Namespace service boundary and the in-memory implementation.

The namespace service is the system of record for policy assignments. The
admin commands only ever talk to it through ``NamespaceService``; policy
names are never validated locally.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol
from urllib.parse import urlsplit

from .errors import (
    IneligiblePathError,
    InvalidArgumentError,
    NoPolicySetError,
    PolicyNotFoundError,
)
from .models import ErasureCodingPolicy, NamespaceState
from .paths import NamespacePath


class NamespaceService(Protocol):
    def list_policies(self) -> list[ErasureCodingPolicy | None]: ...

    def get_effective_policy(self, path: NamespacePath) -> ErasureCodingPolicy | None: ...

    def set_policy(self, path: NamespacePath, policy_name: str) -> None: ...

    def unset_policy(self, path: NamespacePath) -> None: ...


# Resolves the service for a target path; None means the default file system.
Connector = Callable[[NamespacePath | None], NamespaceService]


class InMemoryNamespace:
    """Namespace service over a NamespaceState held in memory.

    Explicit assignments live on single path nodes. The effective policy of a
    path is its own assignment, else the nearest ancestor's, else None.
    """

    def __init__(self, state: NamespaceState | None = None) -> None:
        self.state = state if state is not None else NamespaceState()

    def list_policies(self) -> list[ErasureCodingPolicy | None]:
        return list(self.state.policies)

    def get_effective_policy(self, path: NamespacePath) -> ErasureCodingPolicy | None:
        for candidate in path.lineage():
            name = self.state.assignments.get(candidate.path)
            if name is not None:
                # Assignments outlive policy removal and still resolve by name.
                return self.state.find_policy(name) or ErasureCodingPolicy(name=name)
        return None

    def set_policy(self, path: NamespacePath, policy_name: str) -> None:
        policy = self.state.find_policy(policy_name)
        if policy is None:
            raise PolicyNotFoundError(policy_name, self.state.policy_names())
        if path.path in self.state.files:
            raise IneligiblePathError(
                f"Attempt to set an erasure coding policy for a file {path.path}"
            )
        self.state.assignments[path.path] = policy.name

    def unset_policy(self, path: NamespacePath) -> None:
        if path.path in self.state.files:
            raise IneligiblePathError(
                f"Cannot unset an erasure coding policy on a file {path.path}"
            )
        if self.state.assignments.pop(path.path, None) is None:
            raise NoPolicySetError(path.path)


def check_filesystem(path: NamespacePath, default_fs: str) -> None:
    """Raise InvalidArgumentError if ``path`` names a different file system."""
    if not path.scheme:
        return
    expected = urlsplit(default_fs)
    if path.scheme != expected.scheme or (
        path.authority and path.authority != expected.netloc
    ):
        raise InvalidArgumentError(f"Wrong FS: {path}, expected: {default_fs}")


def connect_namespace(default_fs: str, service: NamespaceService) -> Connector:
    """Build a connector that hands out ``service`` for paths on ``default_fs``."""

    def connect(path: NamespacePath | None) -> NamespaceService:
        if path is not None:
            check_filesystem(path, default_fs)
        return service

    return connect
