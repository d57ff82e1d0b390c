from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import composite

from stickerdiary.common.audit import AuditStamp
from stickerdiary.common.clock import now
from stickerdiary.database import Base


class Sticker(Base):
    __tablename__ = "stickers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    diary_id = Column(Integer, ForeignKey("diaries.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    src = Column(String(500), nullable=False)
    x = Column(Integer, nullable=False, default=0)
    y = Column(Integer, nullable=False, default=0)
    width = Column(Integer, nullable=False, default=0)
    height = Column(Integer, nullable=False, default=0)
    rotation = Column(Float, nullable=False, default=0.0)
    z_index = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=now, nullable=False)
    updated_at = Column(DateTime, default=now, onupdate=now)

    audit = composite(AuditStamp, created_at, updated_at)

    def __repr__(self):
        return f"<Sticker(id={self.id}, type='{self.type}', z_index={self.z_index}, diary_id={self.diary_id})>"
