from sqlalchemy import Column, Text, Boolean, TIMESTAMP, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


class User(Base):
    """
    Mentee account as seen by the matching engine.

    Career field and career stage live on the user record; skills live on
    the profile.
    """
    __tablename__ = 'users'

    id = Column(Text, primary_key=True, default=generate_id)
    email = Column(Text, nullable=False, unique=True)
    display_name = Column(Text)

    career_field_id = Column(Text, ForeignKey('career_field.id', ondelete='SET NULL'), nullable=True)
    # student | early_career | mid_career | senior
    career_stage = Column(Text, nullable=False, default='student')

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    career_field = relationship("CareerField")
    profile = relationship("UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    career_goals = relationship("CareerGoal", back_populates="user", cascade="all, delete-orphan")
    learning_assessments = relationship("LearningAssessment", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_users_email', 'email'),
    )


class UserProfile(Base):
    """
    Extended profile data. Skills are stored as a list of
    {"name": str, "level": str} objects.
    """
    __tablename__ = 'user_profile'

    id = Column(Text, primary_key=True, default=generate_id)
    user_id = Column(Text, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)

    headline = Column(Text)
    bio = Column(Text)
    skills = Column(JSON, nullable=False, default=list)
    interests = Column(JSON, nullable=False, default=list)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="profile")
