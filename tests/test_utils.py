from pathlib import Path

import pytest

from logging_setup import _level_from_env
from practice_api import config
from practice_api.utils import json_utils


def test_json_round_trip(tmp_path: Path) -> None:
    payload = {"message": "All of the above", "count": 2}
    dumped = json_utils.json_dump(payload)
    assert json_utils.json_load(dumped) == payload

    path = tmp_path / "nested" / "payload.json"
    json_utils.write_json_file(path, payload)
    assert json_utils.read_json_file(path, {}) == payload
    assert json_utils.read_json_file(tmp_path / "missing.json", {"fallback": True}) == {"fallback": True}
    assert [p.name for p in path.parent.iterdir()] == ["payload.json"]


def test_parse_int_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAM_QUESTION_COUNT", "40")
    assert config._parse_int_env("EXAM_QUESTION_COUNT", 80) == 40
    monkeypatch.setenv("EXAM_QUESTION_COUNT", "forty")
    assert config._parse_int_env("EXAM_QUESTION_COUNT", 80) == 80
    monkeypatch.delenv("EXAM_QUESTION_COUNT")
    assert config._parse_int_env("EXAM_QUESTION_COUNT", 80) == 80


def test_log_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert _level_from_env(20) == 30
    monkeypatch.setenv("LOG_LEVEL", "nonsense")
    assert _level_from_env(20) == 20
