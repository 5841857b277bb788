from __future__ import annotations
import enum

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func

from .base import Base


class PostingState(str, enum.Enum):
    UNPOSTED = "unposted"
    POSTED = "posted"


class Ad(Base):
    __tablename__ = "ads"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.userid"), nullable=False, index=True)

    username = Column(String(64), nullable=True)
    photos = Column(Text, nullable=False)          # "a.jpg,b.jpg", order matters
    rooms = Column(String(32), nullable=True)
    price = Column(Integer, nullable=False)
    type = Column(String(64), nullable=True)
    area = Column(Integer, nullable=False)
    building = Column(String(200), nullable=True)
    district = Column(String(200), nullable=True)
    text = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # chat_message_id is set together with is_posted, never on its own
    is_posted = Column(Boolean, default=False, nullable=False)
    chat_message_id = Column(Integer, nullable=True)

    @property
    def posting_state(self) -> PostingState:
        return PostingState.POSTED if self.is_posted else PostingState.UNPOSTED

    @property
    def photo_list(self) -> list[str]:
        return [p.strip() for p in (self.photos or "").split(",") if p.strip()]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "username": self.username,
            "photos": self.photos,
            "rooms": self.rooms,
            "price": self.price,
            "type": self.type,
            "area": self.area,
            "building": self.building,
            "district": self.district,
            "text": self.text,
            "created_at": (self.created_at.isoformat() if self.created_at else None),
            "is_posted": 1 if self.is_posted else 0,
            "posting_state": self.posting_state.value,
            "chat_message_id": self.chat_message_id,
        }
