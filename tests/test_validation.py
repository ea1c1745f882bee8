from datetime import datetime

import pytest
from pydantic import ValidationError

from batepapo.config import Settings
from batepapo.validation import MessageIn, ParticipantIn, clean_identity, format_time, sanitize_text


@pytest.mark.parametrize("raw, expected", [
    ("  hello  ", "hello"),
    ("<b>bold</b> move", "bold move"),
    ('<a href="http://x">link</a>', "link"),
    ("<img src=x onerror=alert(1)>", ""),
    ("Tom & Jerry", "Tom & Jerry"),
    ("2 < 3", "2 < 3"),
])
def test_sanitize_text(raw, expected):
    assert sanitize_text(raw) == expected


def test_format_time():
    ts = datetime(2024, 5, 1, 9, 5, 7).timestamp()
    assert format_time(ts) == "09:05:07"


def test_message_schema_cleans_fields():
    msg = MessageIn(to=" Todos ", text=" <i>oi</i> ", type="private_message")
    assert (msg.to, msg.text, msg.type) == ("Todos", "oi", "private_message")


def test_message_schema_rejects_status_type():
    with pytest.raises(ValidationError):
        MessageIn(to="Todos", text="oi", type="status")


def test_participant_schema_rejects_blank_name():
    with pytest.raises(ValidationError):
        ParticipantIn(name=" <br> ")


def test_clean_identity():
    assert clean_identity(None) is None
    assert clean_identity("   ") is None
    assert clean_identity(" Alice ") == "Alice"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp.db")
    monkeypatch.setenv("SWEEP_INTERVAL_SECONDS", "30")
    monkeypatch.setenv("SESSION_TIMEOUT_SECONDS", "20")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("SQL_ECHO", "true")
    monkeypatch.delenv("PORT", raising=False)
    settings = Settings.from_env()
    assert settings.database_url == "sqlite:///tmp.db"
    assert settings.sweep_interval_seconds == 30
    assert settings.session_timeout_seconds == 20
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.sql_echo is True
    assert settings.port == 5000
