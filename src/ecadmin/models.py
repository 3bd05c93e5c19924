"""Domain models for ecadmin."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import SYSTEM_POLICY_NAMES


class ErasureCodingPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("policy name cannot be empty")
        return value


def system_policies() -> list[ErasureCodingPolicy | None]:
    return [ErasureCodingPolicy(name=name) for name in SYSTEM_POLICY_NAMES]


class NamespaceState(BaseModel):
    """Everything the namespace service persists about EC policies."""

    # None entries are placeholders left by removed policies.
    policies: list[ErasureCodingPolicy | None] = Field(default_factory=system_policies)
    # Keyed by normalized absolute path; value is the explicitly assigned policy name
    assignments: dict[str, str] = {}
    # Paths that are regular files and cannot carry an EC layout
    files: list[str] = []

    @field_validator("assignments")
    @classmethod
    def _assignments_valid(cls, value: dict[str, str]) -> dict[str, str]:
        for key, policy_name in value.items():
            if not key.startswith("/"):
                raise ValueError(f"assignment path must be absolute: {key}")
            if not policy_name.strip():
                raise ValueError(f"assignment on {key} names no policy")
        return value

    @field_validator("files")
    @classmethod
    def _file_paths_absolute(cls, value: list[str]) -> list[str]:
        for path in value:
            if not path.startswith("/"):
                raise ValueError(f"file path must be absolute: {path}")
        return value

    def policy_names(self) -> list[str]:
        return [policy.name for policy in self.policies if policy is not None]

    def find_policy(self, name: str) -> ErasureCodingPolicy | None:
        for policy in self.policies:
            if policy is not None and policy.name == name:
                return policy
        return None
