"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from bibnotes.config import Settings, load_settings
from bibnotes.errors import ConfigError
from bibnotes.plugin import BibtexCitations


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("BIBNOTES_BIBTEX_FILE", "BIBNOTES_TEMPLATE", "BIBNOTES_ENV_FILE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.bibtex_file is None
    assert settings.template == "apa"


def test_env_values(monkeypatch: pytest.MonkeyPatch, bibtex_path: Path) -> None:
    monkeypatch.setenv("BIBNOTES_BIBTEX_FILE", str(bibtex_path))
    monkeypatch.setenv("BIBNOTES_TEMPLATE", "plain")

    settings = load_settings()
    assert settings.bibtex_file == bibtex_path
    assert settings.template == "plain"


@pytest.mark.parametrize("value", ["", "   "])
def test_blank_bibtex_file_is_unset(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    """It should treat a blank path as missing, not as the current directory."""

    monkeypatch.setenv("BIBNOTES_BIBTEX_FILE", value)

    settings = Settings()
    assert settings.bibtex_file is None
    with pytest.raises(ConfigError):
        BibtexCitations.from_settings(settings)


def test_env_file_is_read(tmp_path: Path, bibtex_path: Path) -> None:
    (tmp_path / ".env").write_text(f"BIBNOTES_BIBTEX_FILE={bibtex_path}\n", encoding="utf-8")

    assert load_settings().bibtex_file == bibtex_path
