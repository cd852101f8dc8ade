"""
User and profile models
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Enum, Float
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from jeopardy.core.database import Base

class SystemRole(str, enum.Enum):
    """Platform-wide role"""
    ADMIN = "ADMIN"
    USER = "USER"
    MODERATOR = "MODERATOR"  # accepted by role assignment, grants nothing extra

class User(Base):
    """User accounts"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(SystemRole), nullable=False, default=SystemRole.USER)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    profile = relationship("UserProfile", back_populates="user", uselist=False, cascade="all, delete")
    games = relationship("Game", back_populates="creator")

    @property
    def is_admin(self) -> bool:
        return self.role == SystemRole.ADMIN

class UserProfile(Base):
    """Per-user aggregate statistics"""
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    avatar = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    games_played = Column(Integer, nullable=False, default=0)
    games_won = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="profile")
