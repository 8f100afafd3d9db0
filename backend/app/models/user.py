"""User model — account identity and public profile fields."""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, IntegerIDMixin


class User(IntegerIDMixin, TimestampMixin, Base):
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Profile
    display_name = Column(String(100))
    bio = Column(Text)
    profile_picture = Column(String(500))

    # Relationships
    links = relationship("Link", back_populates="user", cascade="all, delete-orphan", order_by="Link.order")
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
