import logging

from app import main
from app.config import DEFAULT_SECRET_KEY


def test_startup_warns_about_development_secret(monkeypatch, caplog):
    monkeypatch.setattr(main.settings, "SECRET_KEY", DEFAULT_SECRET_KEY)

    with caplog.at_level(logging.WARNING, logger="app.main"):
        main.startup()

    assert "SECRET_KEY is not set" in caplog.text


def test_startup_is_quiet_with_configured_secret(monkeypatch, caplog):
    monkeypatch.setattr(main.settings, "SECRET_KEY", "a-real-secret")

    with caplog.at_level(logging.WARNING, logger="app.main"):
        main.startup()

    assert "SECRET_KEY" not in caplog.text
