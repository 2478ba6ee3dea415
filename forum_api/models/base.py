from __future__ import annotations

import datetime

from sqlalchemy.exc import NoResultFound
from sqlalchemy.orm import Query, Session, as_declarative

from forum_api.exceptions import ObjectNotFound


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp, the format every DateTime column is stored in"""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


@as_declarative()
class Base:
    """Base class for all database entities"""

    def __repr__(self):
        attrs = []
        for c in self.__table__.columns:
            attrs.append(f"{c.name}={getattr(self, c.name)}")
        return "{}({})".format(self.__class__.__name__, ', '.join(attrs))


class BaseDbModel(Base):
    __abstract__ = True

    @classmethod
    def create(cls, *, session: Session, **kwargs) -> BaseDbModel:
        obj = cls(**kwargs)
        session.add(obj)
        session.flush()
        return obj

    @classmethod
    def query(cls, *, session: Session) -> Query:
        return session.query(cls)

    @classmethod
    def get(cls, id: int | str, *, session: Session) -> BaseDbModel:
        """Get object by its primary key"""
        pk = cls.__mapper__.primary_key[0]
        try:
            return cls.query(session=session).filter(pk == id).one()
        except NoResultFound:
            raise ObjectNotFound(cls, id)

    @classmethod
    def update(cls, id: int | str, *, session: Session, **kwargs) -> BaseDbModel:
        obj = cls.get(id, session=session)
        for k, v in kwargs.items():
            setattr(obj, k, v)
        session.flush()
        return obj

    @classmethod
    def delete(cls, id: int | str, *, session: Session) -> None:
        obj = cls.get(id, session=session)
        session.delete(obj)
        session.flush()
