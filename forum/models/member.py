# forum/models/member.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from forum.core.database import Base


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)

    # Profile
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=True)

    # Role: member, admin
    role = Column(String(20), default="member", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self):
        return f"<Member(id={self.id}, name='{self.name}', role='{self.role}')>"
