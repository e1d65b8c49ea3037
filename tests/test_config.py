from __future__ import annotations

import json

import pytest

from skillcheck_core import config


@pytest.mark.parametrize("raw,expected", [
    ("1", True), ("true", True), (" Yes ", True), ("on", True),
    ("0", False), ("false", False), ("nope", False),
    ("", True), ("   ", True),
])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("SKILLCHECK_FLAG", raw)
    assert config._env_bool("SKILLCHECK_FLAG", True) is expected


def test_env_bool_unset_uses_default(monkeypatch):
    monkeypatch.delenv("SKILLCHECK_FLAG", raising=False)
    assert config._env_bool("SKILLCHECK_FLAG", False) is False


@pytest.mark.parametrize("raw,expected", [("12", 12), (" 7 ", 7), ("", 5), ("seven", 5), ("3.5", 5)])
def test_env_int(monkeypatch, raw, expected):
    monkeypatch.setenv("SKILLCHECK_COUNT", raw)
    assert config._env_int("SKILLCHECK_COUNT", 5) == expected


@pytest.mark.parametrize("raw,expected", [("0.7", 0.7), ("1", 1.0), ("", 0.2), ("warm", 0.2)])
def test_env_float(monkeypatch, raw, expected):
    monkeypatch.setenv("SKILLCHECK_TEMP", raw)
    assert config._env_float("SKILLCHECK_TEMP", 0.2) == pytest.approx(expected)


def test_load_config_env_wins_over_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.json").write_text(
        json.dumps({"LLM_BACKEND": "openai", "LLM_MODEL": "gpt-4o-mini"}), encoding="utf-8"
    )
    monkeypatch.setenv("LLM_BACKEND", "Azure")
    monkeypatch.delenv("LLM_MODEL", raising=False)

    cfg = config.load_config()

    assert cfg["LLM_MODEL"] == "gpt-4o-mini"
    assert config.get_backend(cfg) == "azure"


def test_unknown_backend_is_none(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("LLM_BACKEND", "bard")

    assert config.get_backend() == "none"
