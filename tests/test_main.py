# tests/test_main.py

from __future__ import annotations

import locale
import logging

import pytest

from glass_todo.cli import main as cli_main


def test_setup_collation_uses_environment_locale(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[int, str]] = []

    def fake_setlocale(category: int, value: str) -> str:
        calls.append((category, value))
        return "en_US.UTF-8"

    monkeypatch.setattr(locale, "setlocale", fake_setlocale)
    assert cli_main.setup_collation() == "en_US.UTF-8"
    assert calls == [(locale.LC_COLLATE, "")]


def test_setup_collation_survives_bad_locale(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def broken_setlocale(category: int, value: str) -> str:
        raise locale.Error("unsupported locale setting")

    monkeypatch.setattr(locale, "setlocale", broken_setlocale)
    with caplog.at_level(logging.WARNING, logger="glass_todo.cli.main"):
        assert cli_main.setup_collation() is None
    assert any("collation locale" in r.getMessage() for r in caplog.records)
