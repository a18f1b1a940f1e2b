import logging
from sqlalchemy.exc import SQLAlchemyError

from fitto.extensions import db
from fitto.models.user import User
from fitto.utils.errors import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)


def commit(action: str):
    """Commit the session, rolling back and raising PersistenceError on failure."""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise PersistenceError(f"Could not {action}") from e


def get_user_or_404(user_id: int, for_update: bool = False) -> User:
    # Row lock serialises read-modify-write of the same user (no-op on SQLite)
    user = db.session.get(User, user_id, with_for_update=for_update)
    if not user:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")
    return user
