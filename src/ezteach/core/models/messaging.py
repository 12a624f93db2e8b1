"""
Messaging Models

Conversations and their ordered participant lists.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, StringIdMixin, TimestampMixin


class Conversation(Base, StringIdMixin, TimestampMixin):
    """A 1:1 or group conversation.

    Group conversations may keep participant ids of users that no longer exist;
    membership display tolerates unknown ids.
    """

    __tablename__ = "conversations"

    title: Mapped[str | None] = mapped_column(String(200), nullable=True)

    participants: Mapped[list[ConversationParticipant]] = relationship(
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="ConversationParticipant.position",
        passive_deletes=True,
    )

    @property
    def participant_ids(self) -> list[str]:
        """Participant user ids in order."""
        return [p.user_id for p in self.participants]


class ConversationParticipant(Base):
    """One slot in a conversation's participant list."""

    __tablename__ = "conversation_participants"
    __table_args__ = (
        UniqueConstraint("conversation_id", "user_id"),
        Index("idx_conversation_participants_user", "user_id"),
    )

    conversation_id: Mapped[str] = mapped_column(
        ForeignKey("conversations.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    conversation: Mapped[Conversation] = relationship(back_populates="participants")
