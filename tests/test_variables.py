import subprocess
from unittest import mock

import pytest

from shellparse import pid as pid_module
from shellparse.variables import VarStore, is_var_assignment


@pytest.fixture
def store():
    return VarStore()


def test_set_and_get(store):
    store.set("NAME", "value")
    assert store.get("NAME") == "value"
    assert "NAME" in store


def test_get_missing_is_none(store):
    assert store.get("MISSING") is None
    assert "MISSING" not in store


def test_set_replaces_and_keeps_order(store):
    store.set("A", "1")
    store.set("B", "2")
    store.set("A", "3")
    assert list(store) == ["A", "B"]
    assert store.get("A") == "3"


def test_clear(store):
    store.set("A", "1")
    store.set("B", "2")
    store.clear()
    assert len(store) == 0
    assert "A" not in store


def test_declare_from_splits_on_first_equals(store):
    assert store.declare_from("KEY=a=b") is True
    assert store.get("KEY") == "a=b"


def test_declare_from_empty_value(store):
    assert store.declare_from("KEY=") is True
    assert store.get("KEY") == ""


def test_declare_from_without_equals(store):
    assert store.declare_from("plain") is False
    assert len(store) == 0


def test_declare_from_updates_existing(store):
    store.set("KEY", "old")
    store.declare_from("KEY=new")
    assert store.get("KEY") == "new"
    assert len(store) == 1


def test_lookup_prefers_store(store, monkeypatch):
    monkeypatch.setenv("SHELLPARSE_TEST_VAR", "from_env")
    store.set("SHELLPARSE_TEST_VAR", "from_store")
    assert store.lookup("SHELLPARSE_TEST_VAR") == "from_store"


def test_lookup_falls_back_to_environment(store, monkeypatch):
    monkeypatch.setenv("SHELLPARSE_TEST_VAR", "from_env")
    assert store.lookup("SHELLPARSE_TEST_VAR") == "from_env"


def test_lookup_empty_store_value_does_not_fall_back(store, monkeypatch):
    monkeypatch.setenv("SHELLPARSE_TEST_VAR", "from_env")
    store.set("SHELLPARSE_TEST_VAR", "")
    assert store.lookup("SHELLPARSE_TEST_VAR") == ""


def test_lookup_unknown_is_empty(store, monkeypatch):
    monkeypatch.delenv("SHELLPARSE_TEST_UNSET", raising=False)
    assert store.lookup("SHELLPARSE_TEST_UNSET") == ""


def test_lookup_exit_status_defaults_to_zero(store):
    assert store.lookup("?") == "0"
    store.set("?", "")
    assert store.lookup("?") == "0"


def test_lookup_exit_status(store):
    store.set("?", "130")
    assert store.lookup("?") == "130"


def test_lookup_dollar_gives_shell_pid(store):
    stdout = b"  PID  PPID COMMAND\n 4321 1 minishell\n"
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout)
    with mock.patch.object(pid_module.subprocess, "run", return_value=completed):
        assert store.lookup("$") == "4321"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("A=1", True),
        ("_x9=", True),
        ("name_2=value", True),
        ("9A=1", False),
        ("=1", False),
        ("A-B=1", False),
        ("ABC", False),
        ("", False),
        (None, False),
    ],
)
def test_is_var_assignment(text, expected):
    assert is_var_assignment(text) is expected