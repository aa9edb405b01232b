from sqlalchemy import Column, Text, Boolean, Integer, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship

from core.scorer.models import LEARNING_STYLES
from .base import Base, generate_id, utcnow


class LearningAssessment(Base):
    """
    Result of a learning style assessment. Each style is scored 0-100.

    A user may have several; the most recent active one is used for matching.
    """
    __tablename__ = 'learning_assessment'

    id = Column(Text, primary_key=True, default=generate_id)
    user_id = Column(Text, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    visual = Column(Integer, nullable=False, default=0)
    auditory = Column(Integer, nullable=False, default=0)
    reading = Column(Integer, nullable=False, default=0)
    kinesthetic = Column(Integer, nullable=False, default=0)

    assessment_version = Column(Text, default='1.0')
    is_active = Column(Boolean, nullable=False, default=True)
    assessment_date = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="learning_assessments")

    __table_args__ = (
        Index('idx_learning_assessment_user_created', 'user_id', 'created_at'),
    )

    @property
    def learning_style_results(self):
        return {style: getattr(self, style) or 0 for style in LEARNING_STYLES}
