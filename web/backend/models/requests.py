#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class BatchMatchingRequest(BaseModel):
    """Request to recompute matches for several users."""
    user_ids: Optional[List[str]] = Field(
        default=None,
        description="Users to recompute; omit or leave empty to recompute every user"
    )
