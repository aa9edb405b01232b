#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class MatchFactorsModel(BaseModel):
    """The five factor scores behind a compatibility score."""
    career_field_match: float = Field(ge=0, le=100)
    experience_level_match: float = Field(ge=0, le=100)
    learning_style_match: float = Field(ge=0, le=100)
    skills_match: float = Field(ge=0, le=100)
    career_goals_match: float = Field(ge=0, le=100)


class MentorMatchSummary(BaseModel):
    """Freshly calculated match for one mentor."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "mentor_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "mentor_name": "Ada",
                "compatibility_score": 84,
                "match_factors": {
                    "career_field_match": 100,
                    "experience_level_match": 100,
                    "learning_style_match": 72.5,
                    "skills_match": 67,
                    "career_goals_match": 50
                }
            }
        }
    )

    mentor_id: str
    mentor_name: str
    compatibility_score: int = Field(ge=0, le=100)
    match_factors: MatchFactorsModel


class CalculateMatchingResponse(BaseModel):
    success: bool
    count: int
    matches: List[MentorMatchSummary]


class MentorDetails(BaseModel):
    """Mentor display fields."""
    mentor_id: str
    name: str
    specialization: str
    bio: str
    profile_image: Optional[str]
    experience_level: str
    skills: List[str]
    rating: Optional[float]


class StoredMatchModel(BaseModel):
    """Persisted match with mentor details attached."""
    match_id: str
    user_id: str
    mentor_id: str
    compatibility_score: int = Field(ge=0, le=100)
    match_factors: MatchFactorsModel
    is_active: bool
    last_calculated: Optional[str]
    mentor: Optional[MentorDetails] = None


class TopMatchesResponse(BaseModel):
    success: bool
    count: int
    matches: List[StoredMatchModel]


class MentorMatchResponse(BaseModel):
    success: bool
    match: StoredMatchModel


class BatchStartResponse(BaseModel):
    """Returned as soon as a batch run has been scheduled."""
    success: bool
    message: str
    job_id: str
    total_users: int


class BatchStatusResponse(BaseModel):
    """Status of a batch matching job."""
    job_id: str
    status: str
    total_users: int
    processed: Optional[int] = None
    failed: Optional[int] = None
    failed_user_ids: List[str] = Field(default_factory=list)
    execution_time: Optional[float] = None
    error: Optional[str] = None
    created_at: Optional[str] = None
    finished_at: Optional[str] = None


class BatchJobListResponse(BaseModel):
    """Batch jobs still held by the job manager, newest first."""
    count: int
    jobs: List[BatchStatusResponse]
