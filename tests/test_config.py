"""Tests for the environment override helpers in the config module."""

from __future__ import annotations

import pytest

from park_explorer import config


def test_env_float_override_and_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PARK_EXPLORER_TEST_FLOAT", "0.0005")
    assert config._env_float("PARK_EXPLORER_TEST_FLOAT", 0.001) == 0.0005
    monkeypatch.setenv("PARK_EXPLORER_TEST_FLOAT", "wide")
    assert config._env_float("PARK_EXPLORER_TEST_FLOAT", 0.001) == 0.001


def test_env_bool_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PARK_EXPLORER_TEST_BOOL", " Off ")
    assert config._env_bool("PARK_EXPLORER_TEST_BOOL", True) is False
    monkeypatch.setenv("PARK_EXPLORER_TEST_BOOL", "maybe")
    assert config._env_bool("PARK_EXPLORER_TEST_BOOL", True) is True


def test_env_int_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PARK_EXPLORER_TEST_LIST", "20, 40,,60")
    assert config._env_int_list("PARK_EXPLORER_TEST_LIST", (10,)) == (20, 40, 60)
    monkeypatch.setenv("PARK_EXPLORER_TEST_LIST", "20,half")
    assert config._env_int_list("PARK_EXPLORER_TEST_LIST", (10,)) == (10,)
    monkeypatch.delenv("PARK_EXPLORER_TEST_LIST")
    assert config._env_int_list("PARK_EXPLORER_TEST_LIST", (10,)) == (10,)


def test_defaults_describe_a_closed_park_ring() -> None:
    assert config.CENTRAL_PARK_BOUNDARY[0] == config.CENTRAL_PARK_BOUNDARY[-1]
    assert config.MILESTONE_SAVE_ATTEMPTS >= 1
