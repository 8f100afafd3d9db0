"""Link model — one entry in a user's public link list."""

from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, IntegerIDMixin


class Link(IntegerIDMixin, TimestampMixin, Base):
    __tablename__ = "links"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    platform = Column(String(50), nullable=False)  # key into the platform catalog
    url = Column(String(2048), nullable=False)
    title = Column(String(100))
    active = Column(Boolean, default=True, nullable=False)

    # Owner-scoped sort key; gaps are allowed
    order = Column(Integer, default=0, nullable=False)

    # Relationships
    user = relationship("User", back_populates="links")

    __table_args__ = (
        Index("idx_links_user_order", "user_id", "order"),
    )
