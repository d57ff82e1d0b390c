import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import composite

from stickerdiary.common.audit import AuditStamp
from stickerdiary.common.clock import now
from stickerdiary.database import Base


class Role(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(100), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt 해시
    nickname = Column(String(50), nullable=False)
    bio = Column(String(200), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    role = Column(Enum(Role, native_enum=False, length=20), nullable=False, default=Role.USER)
    onboarding_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=now, nullable=False)
    updated_at = Column(DateTime, default=now, onupdate=now)

    audit = composite(AuditStamp, created_at, updated_at)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', nickname='{self.nickname}')>"
