from __future__ import annotations
from typing import Callable
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_clock, get_identity, find_participant
from ..errors import ConflictError, NotFoundError
from ..models import BROADCAST, JOIN_TEXT, Message, MessageType, Participant
from ..validation import ParticipantIn, format_time

router = APIRouter(tags=["participants"])


@router.get("/participants")
def list_participants(db: Session = Depends(get_db)):
    participants = db.query(Participant).order_by(Participant.id.asc()).all()
    return [p.to_dict() for p in participants]


@router.post("/participants", status_code=201)
def register_participant(
    body: ParticipantIn,
    db: Session = Depends(get_db),
    clock: Callable[[], float] = Depends(get_clock),
):
    """Join the room and announce it with an "entra na sala..." status."""
    if find_participant(db, body.name):
        raise ConflictError(f"{body.name} is already in the room")

    now = clock()
    participant = Participant(name=body.name, last_status=now)
    db.add(participant)
    db.add(Message(
        from_=body.name,
        to=BROADCAST,
        text=JOIN_TEXT,
        type=MessageType.status,
        time=format_time(now),
    ))
    db.commit()
    db.refresh(participant)
    return participant.to_dict()


@router.post("/status")
def heartbeat(
    name: str = Depends(get_identity),
    db: Session = Depends(get_db),
    clock: Callable[[], float] = Depends(get_clock),
):
    participant = find_participant(db, name)
    if not participant:
        raise NotFoundError("Participant not found")
    participant.last_status = clock()
    db.commit()
    return {"ok": True}
