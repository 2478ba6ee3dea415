import logging

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from forum_api.exceptions import AlreadyReacted, ObjectNotFound
from forum_api.models import Comment, Like, Post, Reaction, Target, TargetType
from forum_api.schemas.models import LikeStats


logger = logging.getLogger(__name__)


def check_target_exists(target: Target, *, session: Session) -> None:
    if target.type is TargetType.POST:
        Post.get(target.id, session=session)
    else:
        Comment.get(target.id, session=session)


def user_reaction(user_id: int, target: Target, *, session: Session) -> Like:
    like = (
        Like.query(session=session)
        .filter(Like.user_id == user_id, Like.for_target(target))
        .one_or_none()
    )
    if like is None:
        raise ObjectNotFound(Like, str(target))
    return like


def set_reaction(user_id: int, target: Target, reaction: Reaction, *, session: Session) -> Like:
    """
    Ставит лайк или дизлайк на пост или комментарий.

    Without a previous reaction a new one is created. An opposite reaction is switched in place.
    Repeating the current reaction is rejected with AlreadyReacted.
    """
    is_dislike = reaction is Reaction.DISLIKE
    try:
        existing = user_reaction(user_id, target, session=session)
    except ObjectNotFound:
        existing = None

    if existing is None:
        like = Like.create(
            session=session,
            user_id=user_id,
            post_id=target.id if target.type is TargetType.POST else None,
            comment_id=target.id if target.type is TargetType.COMMENT else None,
            is_dislike=is_dislike,
        )
        logger.info(f"User {user_id} put {reaction.value} on {target}")
        return like

    if existing.is_dislike == is_dislike:
        raise AlreadyReacted(str(target))

    existing = Like.update(existing.id, session=session, is_dislike=is_dislike)
    logger.info(f"User {user_id} switched reaction on {target} to {reaction.value}")
    return existing


def remove_reaction(user_id: int, target: Target, *, session: Session) -> None:
    like = user_reaction(user_id, target, session=session)
    Like.delete(like.id, session=session)
    logger.info(f"User {user_id} removed reaction from {target}")


def reaction_stats(target: Target, *, session: Session) -> LikeStats:
    likes, dislikes = (
        session.query(
            func.count(case((Like.is_dislike.is_(False), 1))),
            func.count(case((Like.is_dislike.is_(True), 1))),
        )
        .filter(Like.for_target(target))
        .one()
    )
    return LikeStats(likes=likes, dislikes=dislikes)


def user_liked_posts(user_id: int, *, session: Session) -> list[Post]:
    """Posts the user liked, most recently liked first"""
    return (
        Post.query(session=session)
        .join(Like, Like.post_id == Post.id)
        .filter(Like.user_id == user_id, Like.is_dislike.is_(False))
        .order_by(Like.created.desc(), Like.id.desc())
        .all()
    )
