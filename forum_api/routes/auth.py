import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi_sqlalchemy import db

from forum_api.exceptions import (
    AlreadyAuthenticated,
    NotAuthenticated,
    ObjectNotFound,
    SessionExpired,
    SessionNotFound,
)
from forum_api.models import User
from forum_api.schemas.base import StatusResponseModel
from forum_api.schemas.models import CommentGet, PostGet, UserGet, UserLogin, UserProfile, UserRegister
from forum_api.settings import Settings, get_settings
from forum_api.utils.comment import user_comments
from forum_api.utils.post import user_posts
from forum_api.utils.reaction import user_liked_posts
from forum_api.utils.session import create_session, delete_session, get_user_by_session
from forum_api.utils.user import create_user, verify_user


settings: Settings = get_settings()
logger = logging.getLogger(__name__)
auth = APIRouter(tags=["Auth"])

NO_CACHE = "no-store, no-cache, must-revalidate, max-age=0"


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_TTL_HOURS * 60 * 60,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(settings.SESSION_COOKIE_NAME, "", max_age=-1, path="/", httponly=True, samesite="lax")


async def get_current_user(request: Request) -> User | None:
    """Пользователь по cookie сессии, None для гостя"""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    try:
        return get_user_by_session(token, session=db.session)
    except (SessionNotFound, SessionExpired, ObjectNotFound):
        return None


async def require_user(response: Response, user: User | None = Depends(get_current_user)) -> User:
    response.headers["Cache-Control"] = NO_CACHE
    if user is None:
        raise NotAuthenticated()
    return user


async def require_guest(response: Response, user: User | None = Depends(get_current_user)) -> None:
    response.headers["Cache-Control"] = NO_CACHE
    if user is not None:
        raise AlreadyAuthenticated()


@auth.post("/register", response_model=UserGet, dependencies=[Depends(require_guest)])
async def register(user_info: UserRegister, response: Response) -> UserGet:
    """
    Регистрирует пользователя и сразу открывает для него сессию
    """
    logger.info(f"Attempting to register user: username={user_info.username!r} email={user_info.email!r}")
    user = create_user(user_info.username, user_info.email, user_info.password, session=db.session)
    user_session = create_session(user.id, session=db.session)
    set_session_cookie(response, user_session.token)
    return UserGet.model_validate(user)


@auth.post("/login", response_model=UserGet, dependencies=[Depends(require_guest)])
async def login(credentials: UserLogin, response: Response) -> UserGet:
    """
    Входит по email и паролю. Предыдущая сессия пользователя закрывается
    """
    user = verify_user(credentials.email, credentials.password, session=db.session)
    user_session = create_session(user.id, session=db.session)
    set_session_cookie(response, user_session.token)
    logger.info(f"Login successful: id={user.id}, username={user.username!r}")
    return UserGet.model_validate(user)


@auth.post("/logout", response_model=StatusResponseModel)
async def logout(request: Request, response: Response, user: User = Depends(require_user)) -> StatusResponseModel:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    try:
        delete_session(token, session=db.session)
    except SessionNotFound:
        logger.warning(f"Session of user {user.id} was already gone on logout")
    clear_session_cookie(response)
    return StatusResponseModel(status="Success", message="Logged out", ru="Вы вышли из аккаунта")


@auth.get("/me", response_model=UserProfile)
async def profile(user: User = Depends(require_user)) -> UserProfile:
    """
    Профиль текущего пользователя: его посты, лайкнутые посты и комментарии
    """
    return UserProfile(
        user=UserGet.model_validate(user),
        posts=[PostGet.model_validate(post) for post in user_posts(user.id, session=db.session)],
        liked_posts=[PostGet.model_validate(post) for post in user_liked_posts(user.id, session=db.session)],
        comments=[CommentGet.model_validate(comment) for comment in user_comments(user.id, session=db.session)],
    )
