import logging

from sqlalchemy.orm import Session

from forum_api.exceptions import NotAuthor
from forum_api.models import Category, Post, PostCategory
from forum_api.models.base import utcnow
from forum_api.utils.validation import validate_post


logger = logging.getLogger(__name__)


def resolve_categories(category_ids: list[int], *, session: Session) -> list[Category]:
    """Loads categories by id, unknown ids are skipped"""
    categories = []
    for category_id in dict.fromkeys(category_ids):
        category = Category.query(session=session).filter(Category.id == category_id).one_or_none()
        if category is None:
            logger.warning(f"Unknown category id={category_id} skipped")
            continue
        categories.append(category)
    return categories


def create_post(title: str, content: str, user_id: int, category_ids: list[int], *, session: Session) -> Post:
    title, content = validate_post(title, content)
    now = utcnow()
    post = Post.create(session=session, title=title, content=content, user_id=user_id, created=now, updated=now)
    post.categories = resolve_categories(category_ids, session=session)
    session.flush()
    logger.info(f"Post created: id={post.id}, title={post.title!r}, author={user_id}")
    return post


def get_post(post_id: int, *, session: Session) -> Post:
    return Post.get(post_id, session=session)


def list_posts(limit: int, offset: int, *, category_id: int | None = None, session: Session) -> list[Post]:
    """Newest posts first, optionally only those of one category"""
    query = Post.query(session=session)
    if category_id is not None:
        query = query.join(PostCategory, PostCategory.post_id == Post.id).filter(
            PostCategory.category_id == category_id
        )
    return query.order_by(Post.created.desc(), Post.id.desc()).limit(limit).offset(offset).all()


def posts_count(*, category_id: int | None = None, session: Session) -> int:
    query = Post.query(session=session)
    if category_id is not None:
        query = query.join(PostCategory, PostCategory.post_id == Post.id).filter(
            PostCategory.category_id == category_id
        )
    return query.count()


def user_posts(user_id: int, *, session: Session) -> list[Post]:
    return (
        Post.query(session=session)
        .filter(Post.user_id == user_id)
        .order_by(Post.created.desc(), Post.id.desc())
        .all()
    )


def check_post_author(post: Post, user_id: int) -> None:
    if post.user_id != user_id:
        raise NotAuthor(Post)


def update_post(
    post_id: int,
    user_id: int,
    *,
    title: str | None = None,
    content: str | None = None,
    category_ids: list[int] | None = None,
    session: Session,
) -> Post:
    """Only the author may update a post. Categories are replaced when category_ids is given"""
    post = get_post(post_id, session=session)
    check_post_author(post, user_id)
    title, content = validate_post(
        post.title if title is None else title,
        post.content if content is None else content,
    )
    post = Post.update(post_id, session=session, title=title, content=content, updated=utcnow())
    if category_ids is not None:
        post.categories = resolve_categories(category_ids, session=session)
        session.flush()
    logger.info(f"Post updated: id={post.id}, title={post.title!r}, author={user_id}")
    return post


def delete_post(post_id: int, user_id: int, *, session: Session) -> None:
    post = get_post(post_id, session=session)
    check_post_author(post, user_id)
    Post.delete(post_id, session=session)
    logger.info(f"Post deleted: id={post_id}, author={user_id}")
