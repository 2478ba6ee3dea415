import asyncio
import datetime
import logging
import secrets

from fastapi_sqlalchemy import db
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forum_api.exceptions import ObjectNotFound, SessionCreationError, SessionExpired, SessionNotFound
from forum_api.models import User, UserSession
from forum_api.models.base import utcnow
from forum_api.settings import get_settings


logger = logging.getLogger(__name__)


def generate_token() -> str:
    """Random token, hex encoded: 32 bytes give 64 characters"""
    return secrets.token_hex(get_settings().SESSION_TOKEN_BYTES)


def create_session(user_id: int, *, session: Session) -> UserSession:
    """Открывает новую сессию пользователя

    All previous sessions of the user are removed first, so a user has at most one live session.
    """
    try:
        token = generate_token()
    except (OSError, NotImplementedError) as e:
        logger.error(f"Token generation failed: {e}")
        raise SessionCreationError() from e

    now = utcnow()
    try:
        removed = delete_user_sessions(user_id, session=session)
        user_session = UserSession.create(
            session=session,
            token=token,
            user_id=user_id,
            expires=now + datetime.timedelta(hours=get_settings().SESSION_TTL_HOURS),
            created=now,
        )
    except SQLAlchemyError as e:
        logger.exception(f"Session for user {user_id} was not saved")
        raise SessionCreationError() from e
    logger.info(f"Session created for user {user_id}, {removed} previous session(s) revoked")
    return user_session


def get_session(token: str, *, session: Session) -> UserSession:
    """Returns a live session, expired ones are deleted on read"""
    user_session = UserSession.query(session=session).filter(UserSession.token == token).one_or_none()
    if user_session is None:
        raise SessionNotFound()
    if user_session.is_expired():
        logger.warning(f"Expired session of user {user_session.user_id} removed on read")
        session.delete(user_session)
        session.flush()
        raise SessionExpired()
    return user_session


def get_user_by_session(token: str, *, session: Session) -> User:
    user_session = get_session(token, session=session)
    user = User.query(session=session).filter(User.id == user_session.user_id).one_or_none()
    if user is None:
        logger.warning(f"Orphaned session of missing user {user_session.user_id} removed")
        session.delete(user_session)
        session.flush()
        raise ObjectNotFound(User, user_session.user_id)
    return user


def delete_session(token: str, *, session: Session) -> None:
    deleted = UserSession.query(session=session).filter(UserSession.token == token).delete(synchronize_session="fetch")
    session.flush()
    if not deleted:
        raise SessionNotFound()


def delete_user_sessions(user_id: int, *, session: Session) -> int:
    deleted = (
        UserSession.query(session=session)
        .filter(UserSession.user_id == user_id)
        .delete(synchronize_session="fetch")
    )
    session.flush()
    return deleted


def cleanup_expired_sessions(*, session: Session) -> int:
    """Удаляет все истекшие сессии, возвращает их количество"""
    deleted = (
        UserSession.query(session=session)
        .filter(UserSession.expires < utcnow())
        .delete(synchronize_session="fetch")
    )
    session.flush()
    if deleted:
        logger.info(f"Removed {deleted} expired session(s)")
    return deleted


async def sweep_expired_sessions(interval: int) -> None:
    """Periodically removes expired sessions until cancelled"""
    while True:
        await asyncio.sleep(interval)
        try:
            with db(commit_on_exit=True):
                cleanup_expired_sessions(session=db.session)
        except Exception:
            logger.exception("Expired sessions cleanup failed")
