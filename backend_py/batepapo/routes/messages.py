"""Message endpoints.

Every call is identified by the plaintext ``User`` header. A requester
that is not a current participant gets a 422 on every endpoint that
needs one; 401 is reserved for touching someone else's message.
"""

from __future__ import annotations
from typing import Callable, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_clock, get_identity, get_live_participant
from ..errors import NotFoundError, UnauthorizedError
from ..models import BROADCAST, Message, MessageType, Participant
from ..validation import MessageIn, format_time

router = APIRouter(prefix="/messages", tags=["messages"])

# Largest value the store accepts as a LIMIT (signed 64-bit).
MAX_LIMIT = 2**63 - 1


def _get_own_message(db: Session, message_id: int, user: str) -> Message:
    message = db.query(Message).filter(Message.id == message_id).first()
    if not message:
        raise NotFoundError("Message not found")
    if message.from_ != user:
        raise UnauthorizedError("Only the author can change this message")
    return message


@router.get("")
def list_messages(
    limit: Optional[int] = Query(None, ge=0, le=MAX_LIMIT),
    participant: Participant = Depends(get_live_participant),
    db: Session = Depends(get_db),
):
    """Messages visible to the requester, oldest first.

    With ``limit`` only the most recent ``limit`` of them are returned.
    """
    user = participant.name
    query = db.query(Message).filter(or_(
        Message.to == BROADCAST,
        Message.to == user,
        Message.from_ == user,
    ))
    if limit is None:
        messages = query.order_by(Message.id.asc()).all()
    else:
        messages = query.order_by(Message.id.desc()).limit(limit).all()
        messages.reverse()
    return [m.to_dict() for m in messages]


@router.post("", status_code=201)
def post_message(
    body: MessageIn,
    participant: Participant = Depends(get_live_participant),
    db: Session = Depends(get_db),
    clock: Callable[[], float] = Depends(get_clock),
):
    message = Message(
        from_=participant.name,
        to=body.to,
        text=body.text,
        type=MessageType(body.type),
        time=format_time(clock()),
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message.to_dict()


@router.put("/{message_id}")
def edit_message(
    message_id: int,
    body: MessageIn,
    participant: Participant = Depends(get_live_participant),
    db: Session = Depends(get_db),
):
    message = _get_own_message(db, message_id, participant.name)
    message.to = body.to
    message.text = body.text
    message.type = MessageType(body.type)
    db.commit()
    db.refresh(message)
    return message.to_dict()


@router.delete("/{message_id}")
def delete_message(
    message_id: int,
    user: str = Depends(get_identity),
    db: Session = Depends(get_db),
):
    message = _get_own_message(db, message_id, user)
    db.delete(message)
    db.commit()
    return {"ok": True}
