from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    and_,
    func,
    select,
)
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from forum_api.exceptions import InvalidTarget

from .base import BaseDbModel, utcnow


logger = logging.getLogger(__name__)


class Reaction(str, Enum):
    LIKE: str = "like"
    DISLIKE: str = "dislike"


class TargetType(str, Enum):
    POST: str = "post"
    COMMENT: str = "comment"


@dataclass(frozen=True)
class Target:
    """Post or comment a reaction applies to"""

    type: TargetType
    id: int

    @classmethod
    def post(cls, post_id: int) -> Target:
        return cls(TargetType.POST, post_id)

    @classmethod
    def comment(cls, comment_id: int) -> Target:
        return cls(TargetType.COMMENT, comment_id)

    @classmethod
    def from_ids(cls, post_id: int | None = None, comment_id: int | None = None) -> Target:
        if (post_id is None) == (comment_id is None):
            raise InvalidTarget()
        if post_id is not None:
            return cls.post(post_id)
        return cls.comment(comment_id)

    def __str__(self) -> str:
        return f"{self.type.value} {self.id}"


class User(BaseDbModel):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    created: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)


class UserSession(BaseDbModel):
    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False, index=True)
    created: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def is_expired(self, now: datetime.datetime | None = None) -> bool:
        return (now or utcnow()) > self.expires


class Post(BaseDbModel):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    author: Mapped[User] = relationship("User", lazy="joined")
    comments: Mapped[list[Comment]] = relationship(
        "Comment", back_populates="post", cascade="all, delete-orphan", order_by="Comment.created"
    )
    categories: Mapped[list[Category]] = relationship(
        "Category", secondary="post_categories", back_populates="posts", order_by="Category.name"
    )
    likes: Mapped[list[Like]] = relationship(
        "Like", back_populates="post", cascade="all, delete-orphan", foreign_keys="Like.post_id"
    )

    @property
    def username(self) -> str | None:
        return self.author.username if self.author else None


class Comment(BaseDbModel):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    post: Mapped[Post] = relationship("Post", back_populates="comments")
    author: Mapped[User] = relationship("User", lazy="joined")
    likes: Mapped[list[Like]] = relationship(
        "Like", back_populates="comment", cascade="all, delete-orphan", foreign_keys="Like.comment_id"
    )

    @property
    def username(self) -> str | None:
        return self.author.username if self.author else None


class Category(BaseDbModel):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    created: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    posts: Mapped[list[Post]] = relationship("Post", secondary="post_categories", back_populates="categories")


class PostCategory(BaseDbModel):
    __tablename__ = "post_categories"

    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )


class Like(BaseDbModel):
    __tablename__ = "likes"
    __table_args__ = (
        CheckConstraint("(post_id IS NULL) <> (comment_id IS NULL)", name="likes_single_target"),
        UniqueConstraint("user_id", "post_id", name="likes_user_post_key"),
        UniqueConstraint("user_id", "comment_id", name="likes_user_comment_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    post_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=True)
    comment_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    )
    is_dislike: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    post: Mapped[Post | None] = relationship("Post", back_populates="likes", foreign_keys=[post_id])
    comment: Mapped[Comment | None] = relationship("Comment", back_populates="likes", foreign_keys=[comment_id])

    @property
    def reaction(self) -> Reaction:
        return Reaction.DISLIKE if self.is_dislike else Reaction.LIKE

    @property
    def target(self) -> Target:
        return Target.from_ids(self.post_id, self.comment_id)

    @classmethod
    def for_target(cls, target: Target):
        """SQL condition selecting reactions on the target"""
        if target.type is TargetType.POST:
            return cls.post_id == target.id
        return cls.comment_id == target.id


def reaction_count(on_target, is_dislike: bool):
    """Коррелированный подзапрос: число реакций заданной полярности, считается в том же SELECT"""
    return (
        select(func.count(Like.id))
        .where(and_(on_target, Like.is_dislike.is_(is_dislike)))
        .correlate_except(Like)
        .scalar_subquery()
    )


Post.like_count = column_property(reaction_count(Like.post_id == Post.id, False))
Post.dislike_count = column_property(reaction_count(Like.post_id == Post.id, True))
Comment.like_count = column_property(reaction_count(Like.comment_id == Comment.id, False))
Comment.dislike_count = column_property(reaction_count(Like.comment_id == Comment.id, True))
