import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi_sqlalchemy import DBSessionMiddleware

from forum_api import __version__
from forum_api.routes.auth import auth
from forum_api.routes.category import category
from forum_api.routes.comment import comment
from forum_api.routes.like import like
from forum_api.routes.post import post
from forum_api.settings import Settings, get_settings
from forum_api.utils.session import sweep_expired_sessions


settings: Settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.LOG_LEVEL)
    sweeper = None
    if settings.SESSION_CLEANUP_INTERVAL_SEC > 0:
        sweeper = asyncio.create_task(sweep_expired_sessions(settings.SESSION_CLEANUP_INTERVAL_SEC))
    else:
        logger.warning("Expired sessions sweep is disabled, run cleanup-sessions periodically")
    yield
    if sweeper is not None:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper


app = FastAPI(
    title='Форум',
    description='Посты, комментарии, категории и реакции пользователей форума.',
    version=__version__,
    # Отключаем нелокальную документацию
    root_path=settings.ROOT_PATH if __version__ != 'dev' else '/',
    docs_url=None if __version__ != 'dev' else '/docs',
    redoc_url=None,
    lifespan=lifespan,
)

engine_args = {"pool_pre_ping": True, "isolation_level": "AUTOCOMMIT"}
if settings.DB_DSN.startswith("sqlite"):
    engine_args["connect_args"] = {"check_same_thread": False}

app.add_middleware(
    DBSessionMiddleware,
    db_url=settings.DB_DSN,
    engine_args=engine_args,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)

app.include_router(auth)
app.include_router(post)
app.include_router(comment)
app.include_router(category)
app.include_router(like)
