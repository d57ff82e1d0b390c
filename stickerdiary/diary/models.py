from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import composite, relationship

from stickerdiary.common.audit import AuditStamp
from stickerdiary.common.clock import now
from stickerdiary.database import Base
from stickerdiary.sticker.models import Sticker


class Diary(Base):
    __tablename__ = "diaries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    memo = Column(Text, nullable=True)
    date = Column(Date, nullable=True)
    genre = Column(String(50), nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime, nullable=True)
    like_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=now, nullable=False)
    updated_at = Column(DateTime, default=now, onupdate=now)

    audit = composite(AuditStamp, created_at, updated_at)

    # 스티커 쓰기는 sticker.service가 명시적으로 처리하고, 여기서는 z-index 순 조회만 한다
    stickers = relationship(Sticker, viewonly=True, order_by=[Sticker.z_index, Sticker.id])

    def move_to_trash(self):
        self.is_deleted = True
        self.deleted_at = now()

    def restore(self):
        self.is_deleted = False
        self.deleted_at = None

    @property
    def sticker_count(self):
        return len(self.stickers)

    def __repr__(self):
        return f"<Diary(id={self.id}, title='{self.title}', user_id={self.user_id})>"
