"""Request schemas and free-text cleanup.

Every user-supplied string goes through ``sanitize_text``: HTML is
stripped with bleach and surrounding whitespace removed. A string that
is empty afterwards is rejected, which FastAPI reports as a 422.
"""

from __future__ import annotations

import html
from datetime import datetime
from typing import Literal

import bleach
from pydantic import BaseModel, field_validator


def sanitize_text(value: str) -> str:
    """Remove every HTML tag and trim the result.

    The result is plain text: entities bleach escapes while stripping
    are decoded again, so ``Tom & Jerry`` stays as typed.
    """
    stripped = bleach.clean(value, tags=frozenset(), attributes={}, strip=True)
    return html.unescape(stripped).strip()


def format_time(timestamp: float) -> str:
    """Wall-clock ``HH:MM:SS`` for an epoch timestamp."""
    return datetime.fromtimestamp(timestamp).strftime("%H:%M:%S")


def _required(value: str) -> str:
    cleaned = sanitize_text(value)
    if not cleaned:
        raise ValueError("must not be empty")
    return cleaned


class ParticipantIn(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def _clean_name(cls, v: str) -> str:
        return _required(v)


class MessageIn(BaseModel):
    to: str
    text: str
    type: Literal["message", "private_message"]

    @field_validator("to", "text")
    @classmethod
    def _clean_fields(cls, v: str) -> str:
        return _required(v)


def clean_identity(user: str | None) -> str | None:
    """Sanitized value of the ``User`` header, or None when blank."""
    if user is None:
        return None
    cleaned = sanitize_text(user)
    return cleaned or None
