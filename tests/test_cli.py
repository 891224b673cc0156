import os
from pathlib import Path

import pytest

import cli


def test_serve_data_dir_overrides_inherited_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setenv("QUIZ_DATA_DIR", str(tmp_path / "inherited"))
    monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: calls.append(kwargs))

    data_dir = tmp_path / "explicit"
    assert cli.main(["serve", "--data-dir", str(data_dir), "--port", "8123"]) == 0

    assert os.environ["QUIZ_DATA_DIR"] == str(data_dir)
    assert data_dir.is_dir()
    assert calls[0]["port"] == 8123
