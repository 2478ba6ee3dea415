import logging
from functools import lru_cache

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from forum_api.exceptions import AlreadyExists, EmailNotFound, IncorrectPassword
from forum_api.models import User
from forum_api.settings import get_settings
from forum_api.utils.validation import validate_email, validate_password, validate_username


logger = logging.getLogger(__name__)


@lru_cache
def get_password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str) -> str:
    return get_password_context(get_settings().PASSWORD_HASH_ROUNDS).hash(password)


def check_password(password: str, password_hash: str) -> bool:
    return get_password_context(get_settings().PASSWORD_HASH_ROUNDS).verify(password, password_hash)


def check_user_uniqueness(username: str, email: str, *, session: Session) -> None:
    if User.query(session=session).filter(User.username == username).one_or_none() is not None:
        raise AlreadyExists(User, "username", username)
    if User.query(session=session).filter(User.email == email).one_or_none() is not None:
        raise AlreadyExists(User, "email", email)


def create_user(username: str, email: str, password: str, *, session: Session) -> User:
    """Validates and registers a new user

    Username is checked before email, so a request clashing on both reports the username.
    """
    username = validate_username(username)
    email = validate_email(email)
    password = validate_password(password)
    check_user_uniqueness(username, email, session=session)

    user = User.create(session=session, username=username, email=email, password_hash=hash_password(password))
    logger.info(f"User {user.username!r} registered with id={user.id}")
    return user


def verify_user(email: str, password: str, *, session: Session) -> User:
    user = User.query(session=session).filter(User.email == (email or "").strip().lower()).one_or_none()
    if user is None:
        raise EmailNotFound()
    if not check_password(password, user.password_hash):
        raise IncorrectPassword()
    return user
