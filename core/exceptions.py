"""
Domain exceptions raised by the matching engine.
"""


class MatchingError(Exception):
    """Base exception for matching engine errors."""
    pass


class NotFoundError(MatchingError):
    """Raised when a required record does not exist."""
    pass


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, user_id):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class ProfileNotFoundError(NotFoundError):
    """Raised when a user exists but has no profile."""

    def __init__(self, user_id):
        super().__init__(f"User profile not found for user {user_id}")
        self.user_id = user_id


class MatchNotFoundError(NotFoundError):
    """Raised when a match record is not found."""
    pass
