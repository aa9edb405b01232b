from sqlalchemy import Column, Text, Boolean, Integer, TIMESTAMP, ForeignKey, JSON, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


class MentorMatch(Base):
    """
    Stores the compatibility result between a user and a mentor.

    One row per (user, mentor) pair. Recomputation overwrites
    compatibility_score, match_factors and last_calculated in place.
    is_active is flipped by collaborators to hide stale rows from ranking.
    """
    __tablename__ = 'mentor_match'

    id = Column(Text, primary_key=True, default=generate_id)
    user_id = Column(Text, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    mentor_id = Column(Text, ForeignKey('mentor.id', ondelete='CASCADE'), nullable=False)

    compatibility_score = Column(Integer, nullable=False)
    match_factors = Column(JSON, nullable=False, default=dict)

    is_active = Column(Boolean, nullable=False, default=True)
    last_calculated = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    mentor = relationship("Mentor", back_populates="matches")

    __table_args__ = (
        UniqueConstraint('user_id', 'mentor_id', name='uq_mentor_match_user_mentor'),
        Index('idx_mentor_match_user_score', 'user_id', 'compatibility_score'),
        Index('idx_mentor_match_active', 'is_active'),
    )
