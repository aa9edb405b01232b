from sqlalchemy import Column, Text, Boolean, Float, TIMESTAMP, JSON, Index
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


def _default_style_compatibility():
    return {'visual': 5, 'auditory': 5, 'reading': 5, 'kinesthetic': 5}


class Mentor(Base):
    """
    Mentor available for matching.

    career_field_ids holds CareerField ids; learning_style_compatibility maps
    each learning style to an affinity in [1, 10].
    """
    __tablename__ = 'mentor'

    id = Column(Text, primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    specialization = Column(Text, nullable=False)
    bio = Column(Text, nullable=False, default='')
    profile_image = Column(Text, default='/assets/default-mentor.png')

    career_field_ids = Column(JSON, nullable=False, default=list)
    # beginner | intermediate | advanced | expert
    experience_level = Column(Text, nullable=False, default='expert')
    skills = Column(JSON, nullable=False, default=list)
    learning_style_compatibility = Column(JSON, nullable=True, default=_default_style_compatibility)

    rating = Column(Float, default=4.5)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    matches = relationship("MentorMatch", back_populates="mentor", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_mentor_active', 'is_active'),
    )
