import argparse
import logging

import uvicorn
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from forum_api.routes import app
from forum_api.settings import get_settings
from forum_api.utils.session import cleanup_expired_sessions


logger = logging.getLogger(__name__)


def cleanup_sessions() -> int:
    """Удаляет истекшие сессии, для запуска по расписанию вместо фоновой задачи"""
    engine = create_engine(get_settings().DB_DSN)
    with Session(engine) as session:
        removed = cleanup_expired_sessions(session=session)
        session.commit()
    logger.info(f"Removed {removed} expired session(s)")
    return removed


def main() -> None:
    parser = argparse.ArgumentParser(prog="forum_api")
    parser.add_argument("command", nargs="?", choices=["serve", "cleanup-sessions"], default="serve")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    logging.basicConfig(level=get_settings().LOG_LEVEL)
    if args.command == "cleanup-sessions":
        cleanup_sessions()
    else:
        uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
