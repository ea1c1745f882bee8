# backend_py/batepapo/deps.py
from __future__ import annotations
from typing import Callable
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session
from .db import get_db
from .errors import ValidationError
from .models import Participant
from .validation import clean_identity


def get_clock(request: Request) -> Callable[[], float]:
    return request.app.state.clock


def get_identity(user: str | None = Header(default=None)) -> str:
    name = clean_identity(user)
    if not name:
        raise ValidationError("Missing User header")
    return name


def find_participant(db: Session, name: str) -> Participant | None:
    return db.query(Participant).filter(Participant.name == name).first()


def get_live_participant(name: str = Depends(get_identity),
                         db: Session = Depends(get_db)) -> Participant:
    participant = find_participant(db, name)
    if not participant:
        raise ValidationError("Unknown participant")
    return participant
