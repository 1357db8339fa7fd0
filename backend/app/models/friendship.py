import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.user import User


def pair_key(first_user_id, second_user_id) -> str:
    """Direction-independent key of the unordered pair {first, second}."""
    low, high = sorted((str(first_user_id), str(second_user_id)))
    return f"{low}:{high}"


def _default_pair_key(context) -> str:
    params = context.get_current_parameters()
    return pair_key(params["user_id"], params["friend_id"])


class Friendship(Base):
    """
    One row per unordered pair of users.

    ``user_id`` is the requester and ``friend_id`` the recipient; the direction
    only matters while the row is pending. Readers must check both columns.
    """

    __tablename__ = "friendships"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("usuarios.id"), nullable=False, index=True)
    friend_id = Column(UUID(as_uuid=True), ForeignKey("usuarios.id"), nullable=False, index=True)
    status = Column(String(16), nullable=False, default="pending")
    pair_key = Column(String(80), nullable=False, unique=True, default=_default_pair_key)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    requester = relationship(User, foreign_keys=[user_id])
    recipient = relationship(User, foreign_keys=[friend_id])

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'accepted')", name="friendship_status_valid"),
    )
