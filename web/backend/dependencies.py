#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from core.config_loader import get_config
from core.matching_service import MatchingService


@lru_cache()
def get_matching_service() -> MatchingService:
    """
    FastAPI dependency returning the process-wide MatchingService.

    A single instance is shared so batch jobs started by one request can be
    polled by later ones.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(service: MatchingService = Depends(get_matching_service)):
            ...
    """
    return MatchingService(get_config().matching)
