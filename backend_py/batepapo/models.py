from __future__ import annotations

from sqlalchemy import Column, Integer, String, Text, Float
from sqlalchemy import Enum as SAEnum
from enum import Enum as PyEnum

from .db import Base

BROADCAST = "Todos"
JOIN_TEXT = "entra na sala..."
LEAVE_TEXT = "sai da sala..."


class MessageType(str, PyEnum):
    message = "message"
    private_message = "private_message"
    status = "status"


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, index=True)
    # Not unique at the table level; registration rejects duplicates.
    name = Column(String(255), nullable=False, index=True)
    last_status = Column(Float, nullable=False, index=True)  # epoch seconds

    def to_dict(self) -> dict:
        return {"name": self.name, "lastStatus": self.last_status}


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    from_ = Column("from", String(255), nullable=False, index=True)
    to = Column(String(255), nullable=False, index=True)
    text = Column(Text, nullable=False)
    type = Column(
        SAEnum(MessageType, name="message_type"),
        nullable=False,
        default=MessageType.message,
    )
    time = Column(String(8), nullable=False)  # HH:MM:SS

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "from": self.from_,
            "to": self.to,
            "text": self.text,
            "type": self.type.value if isinstance(self.type, MessageType) else self.type,
            "time": self.time,
        }
