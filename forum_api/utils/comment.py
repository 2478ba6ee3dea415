import logging

from sqlalchemy.orm import Session

from forum_api.exceptions import NotAuthor
from forum_api.models import Comment, Post
from forum_api.models.base import utcnow
from forum_api.utils.validation import validate_comment


logger = logging.getLogger(__name__)


def create_comment(content: str, post_id: int, user_id: int, *, session: Session) -> Comment:
    content = validate_comment(content)
    Post.get(post_id, session=session)
    now = utcnow()
    comment = Comment.create(
        session=session, content=content, post_id=post_id, user_id=user_id, created=now, updated=now
    )
    logger.info(f"Comment created: id={comment.id}, post={post_id}, author={user_id}")
    return comment


def get_comment(comment_id: int, *, session: Session) -> Comment:
    return Comment.get(comment_id, session=session)


def post_comments(post_id: int, limit: int | None = None, offset: int = 0, *, session: Session) -> list[Comment]:
    """Comments of a post in thread order, oldest first"""
    query = (
        Comment.query(session=session)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created, Comment.id)
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def comments_count(post_id: int, *, session: Session) -> int:
    return Comment.query(session=session).filter(Comment.post_id == post_id).count()


def user_comments(user_id: int, *, session: Session) -> list[Comment]:
    return (
        Comment.query(session=session)
        .filter(Comment.user_id == user_id)
        .order_by(Comment.created.desc(), Comment.id.desc())
        .all()
    )


def update_comment(comment_id: int, content: str, user_id: int, *, session: Session) -> Comment:
    content = validate_comment(content)
    comment = get_comment(comment_id, session=session)
    if comment.user_id != user_id:
        raise NotAuthor(Comment)
    return Comment.update(comment_id, session=session, content=content, updated=utcnow())


def delete_comment(comment_id: int, user_id: int, *, session: Session) -> None:
    comment = get_comment(comment_id, session=session)
    if comment.user_id != user_id:
        raise NotAuthor(Comment)
    Comment.delete(comment_id, session=session)
    logger.info(f"Comment deleted: id={comment_id}, author={user_id}")
