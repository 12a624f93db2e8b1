"""
EZTeach SQLAlchemy Models
"""

from .base import Base, StringIdMixin, TimestampMixin
from .content import LessonPlan, SupportClaim
from .leaderboards import ScoreEvent
from .messaging import Conversation, ConversationParticipant
from .schools import District, School
from .students import Student
from .users import Parent, ParentStudentLink, Sub, Teacher, User

__all__ = [
    # Base
    "Base",
    "StringIdMixin",
    "TimestampMixin",
    # Users
    "User",
    "Teacher",
    "Sub",
    "Parent",
    "ParentStudentLink",
    # Students
    "Student",
    # Schools
    "District",
    "School",
    # Messaging
    "Conversation",
    "ConversationParticipant",
    # Content
    "LessonPlan",
    "SupportClaim",
    # Leaderboards
    "ScoreEvent",
]
