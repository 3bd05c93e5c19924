"""Tests for JSON namespace persistence."""

import json
from pathlib import Path

import pytest

from ecadmin.errors import NamespaceUnavailableError, NoPolicySetError, PolicyNotFoundError
from ecadmin.models import NamespaceState
from ecadmin.paths import parse_path
from ecadmin.store import JsonNamespaceStore, load_state, save_state


def test_load_missing_file_returns_default_state(tmp_path: Path) -> None:
    state = load_state(tmp_path / "missing.json")
    assert state.assignments == {}
    assert "RS-6-3-1024k" in state.policy_names()


def test_save_creates_parents_and_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "namespace.json"
    save_state(NamespaceState(assignments={"/a": "RS-6-3-1024k"}), path)

    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert json.loads(text)["assignments"] == {"/a": "RS-6-3-1024k"}


def test_save_then_load_preserves_state(tmp_path: Path) -> None:
    path = tmp_path / "namespace.json"
    state = NamespaceState(
        assignments={"/a": "RS-3-2-1024k"},
        files=["/a/file.txt"],
    )
    save_state(state, path)
    assert load_state(path) == state


def test_load_keeps_null_policy_placeholders(tmp_path: Path) -> None:
    path = tmp_path / "namespace.json"
    path.write_text(json.dumps({"policies": [{"name": "RS-6-3-1024k"}, None]}), encoding="utf-8")

    state = load_state(path)

    assert state.policies[1] is None
    assert state.policy_names() == ["RS-6-3-1024k"]


def test_load_invalid_json_raises_unavailable(tmp_path: Path) -> None:
    path = tmp_path / "namespace.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(NamespaceUnavailableError, match="Invalid namespace state JSON"):
        load_state(path)


def test_load_invalid_schema_raises_unavailable(tmp_path: Path) -> None:
    path = tmp_path / "namespace.json"
    path.write_text(json.dumps({"assignments": {"relative/path": "RS-6-3-1024k"}}), encoding="utf-8")
    with pytest.raises(NamespaceUnavailableError, match="Invalid namespace state"):
        load_state(path)


def test_load_directory_raises_unavailable(tmp_path: Path) -> None:
    with pytest.raises(NamespaceUnavailableError, match="Could not read"):
        load_state(tmp_path)


def test_store_persists_mutations_between_instances(tmp_path: Path) -> None:
    path = tmp_path / "namespace.json"
    JsonNamespaceStore(path).set_policy(parse_path("/a"), "RS-6-3-1024k")

    policy = JsonNamespaceStore(path).get_effective_policy(parse_path("/a/b"))

    assert policy is not None
    assert policy.name == "RS-6-3-1024k"


def test_store_unset_persists(tmp_path: Path) -> None:
    path = tmp_path / "namespace.json"
    store = JsonNamespaceStore(path)
    store.set_policy(parse_path("/a"), "RS-6-3-1024k")
    store.unset_policy(parse_path("/a"))

    assert load_state(path).assignments == {}


def test_store_failed_mutation_leaves_file_untouched(tmp_path: Path) -> None:
    path = tmp_path / "namespace.json"
    store = JsonNamespaceStore(path)

    with pytest.raises(PolicyNotFoundError):
        store.set_policy(parse_path("/a"), "nope")
    with pytest.raises(NoPolicySetError):
        store.unset_policy(parse_path("/a"))

    assert not path.exists()


def test_store_list_policies_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "namespace.json"
    save_state(NamespaceState(policies=[None]), path)
    assert JsonNamespaceStore(path).list_policies() == [None]


def test_load_undecodable_file_raises_unavailable(tmp_path: Path) -> None:
    path = tmp_path / "namespace.json"
    path.write_bytes(b"\xff\xfe{}")
    with pytest.raises(NamespaceUnavailableError, match="Could not read namespace state"):
        load_state(path)


@pytest.mark.parametrize("policy_name", ["", "   "])
def test_load_blank_assignment_raises_unavailable(tmp_path: Path, policy_name: str) -> None:
    path = tmp_path / "namespace.json"
    path.write_text(json.dumps({"assignments": {"/a": policy_name}}), encoding="utf-8")
    with pytest.raises(NamespaceUnavailableError, match="Invalid namespace state"):
        load_state(path)
