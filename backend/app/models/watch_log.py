from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.db import Base


class WatchLogEntry(Base):
    __tablename__ = "visionados"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("usuarios.id"), nullable=False, index=True)
    content_id = Column(Integer, ForeignKey("contenidos.id"), nullable=False)
    platform_id = Column(String(50), ForeignKey("plataformas.id"), nullable=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    watched_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    owner = relationship("User")
    content = relationship("Content")
    platform = relationship("Platform")

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 10", name="watch_log_rating_range"),
    )
