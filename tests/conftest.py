import importlib
import sys
from pathlib import Path

import pytest
from _pytest.monkeypatch import MonkeyPatch
from alembic import command
from alembic.config import Config as AlembicConfig
from fastapi.testclient import TestClient
from forum_api.models import Base
from forum_api.routes import app
from forum_api.settings import get_settings
from forum_api.utils.category import create_category
from forum_api.utils.comment import create_comment
from forum_api.utils.post import create_post
from forum_api.utils.user import create_user
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker


ALEMBIC_INI: Path = Path(__file__).resolve().parent.parent / "alembic.ini"
PASSWORD: str = "secret1"


@pytest.fixture(scope="session")
def session_mp():
    """Аналог monkeypatch, но с session-scope."""
    mp = MonkeyPatch()
    yield mp
    mp.undo()


@pytest.fixture(scope="session")
def get_settings_mock(session_mp, tmp_path_factory):
    """Подмена настроек через окружение и перезагрузка base.app с тестовой БД."""
    dsn = f"sqlite:///{tmp_path_factory.mktemp('db') / 'forum.db'}"
    session_mp.setenv("DB_DSN", dsn)
    session_mp.setenv("PASSWORD_HASH_ROUNDS", "4")
    get_settings.cache_clear()
    reloaded_module = sys.modules["forum_api.routes.base"]
    importlib.reload(reloaded_module)
    importlib.reload(sys.modules["forum_api.routes.exc_handlers"])
    globals()["app"] = reloaded_module.app
    return dsn


@pytest.fixture(scope="session")
def db_container(get_settings_mock):
    """Фикстура настройки тестовой БД: файл SQLite со схемой из alembic-миграций."""
    cfg = AlembicConfig(str(ALEMBIC_INI))
    cfg.set_main_option("script_location", "%(here)s/migrations")
    cfg.set_main_option("sqlalchemy.url", get_settings_mock)
    command.upgrade(cfg, "head")
    yield get_settings_mock


@pytest.fixture()
def dbsession(db_container):
    """Фикстура настройки Session для работы с БД в тестах."""
    engine = create_engine(str(db_container), connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()
    engine.dispose()


@pytest.fixture
def client(dbsession):
    client = TestClient(app)
    return client


@pytest.fixture
def lifespan_client(dbsession, monkeypatch):
    """Клиент с запущенным lifespan: истекшие сессии чистятся раз в секунду"""
    monkeypatch.setattr(sys.modules["forum_api.routes.base"].settings, "SESSION_CLEANUP_INTERVAL_SEC", 1)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def login(dbsession):
    """Фабрика клиентов, каждый со своей cookie сессии"""

    def _login(email: str, password: str = PASSWORD) -> TestClient:
        client = TestClient(app)
        response = client.post("/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return client

    return _login


@pytest.fixture
def user(dbsession):
    _user = create_user("alice", "alice@example.com", PASSWORD, session=dbsession)
    dbsession.commit()
    return _user


@pytest.fixture
def another_user(dbsession):
    _user = create_user("bob", "bob@example.com", PASSWORD, session=dbsession)
    dbsession.commit()
    return _user


@pytest.fixture
def auth_client(client, user):
    response = client.post("/login", json={"email": user.email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def admin_client(auth_client, user, monkeypatch):
    monkeypatch.setattr(get_settings(), "ADMIN_USER_IDS", [user.id])
    return auth_client


@pytest.fixture
def another_client(login, another_user):
    return login(another_user.email)


@pytest.fixture
def category(dbsession):
    _category = create_category("News", "news", "Site news", session=dbsession)
    dbsession.commit()
    return _category


@pytest.fixture
def post(dbsession, user, category):
    _post = create_post("First post", "Hello, forum!", user.id, [category.id], session=dbsession)
    dbsession.commit()
    return _post


@pytest.fixture
def comment(dbsession, post, another_user):
    _comment = create_comment("Nice post", post.id, another_user.id, session=dbsession)
    dbsession.commit()
    return _comment


@pytest.fixture
def posts(dbsession, user, another_user, category):
    """
    Creates 5 posts: 3 by the first user (two of them in the category) and 2 by the second one
    """
    posts_data = [
        ("Post 0", user.id, [category.id]),
        ("Post 1", user.id, []),
        ("Post 2", another_user.id, [category.id]),
        ("Post 3", user.id, [category.id]),
        ("Post 4", another_user.id, []),
    ]
    _posts = [
        create_post(title, f"Content of {title.lower()}", user_id, category_ids, session=dbsession)
        for title, user_id, category_ids in posts_data
    ]
    dbsession.commit()
    return _posts
