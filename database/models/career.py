from sqlalchemy import Column, Text, Boolean, Integer, TIMESTAMP, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


class CareerField(Base):
    __tablename__ = 'career_field'

    id = Column(Text, primary_key=True, default=generate_id)
    name = Column(Text, nullable=False, unique=True)
    description = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)


class CareerGoal(Base):
    """
    A user's career goal. Only related_skills feeds the matching engine.
    """
    __tablename__ = 'career_goal'

    id = Column(Text, primary_key=True, default=generate_id)
    user_id = Column(Text, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    title = Column(Text, nullable=False)
    description = Column(Text)
    timeframe = Column(Text, default='short_term')  # short_term | mid_term | long_term
    status = Column(Text, default='not_started')  # not_started | in_progress | completed | deferred
    priority = Column(Text, default='medium')  # low | medium | high
    progress = Column(Integer, default=0)
    related_skills = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="career_goals")

    __table_args__ = (
        Index('idx_career_goal_user', 'user_id'),
    )
