import contextlib
import logging
from typing import Callable, Iterator, Optional

from sqlalchemy.orm import Session

from database.database import SessionLocal
from database.repository import MatchingRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def matching_uow(
    session_factory: Optional[Callable[[], Session]] = None
) -> Iterator[MatchingRepository]:
    """Run matching reads and writes in one transaction.

    The session comes from session_factory when given (tests pass an
    in-memory database here), otherwise from the configured engine.

        with matching_uow() as repo:
            MatchCalculator(repo).calculate_for_user(user_id)

    Everything written inside the block is committed together when it exits
    cleanly and discarded if it raises.
    """
    session = (session_factory or SessionLocal)()
    try:
        yield MatchingRepository(session)
        session.commit()
    except Exception:
        logger.debug("Rolling back matching unit of work")
        session.rollback()
        raise
    finally:
        session.close()
