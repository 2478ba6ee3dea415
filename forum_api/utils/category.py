import logging

from sqlalchemy.orm import Session

from forum_api.exceptions import AlreadyExists, ObjectNotFound
from forum_api.models import Category, Post
from forum_api.utils.post import list_posts
from forum_api.utils.validation import validate_category


logger = logging.getLogger(__name__)


def check_category_uniqueness(name: str, slug: str, *, exclude_id: int | None = None, session: Session) -> None:
    for field, value in (("name", name), ("slug", slug)):
        query = Category.query(session=session).filter(getattr(Category, field) == value)
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        if query.first() is not None:
            raise AlreadyExists(Category, field, value)


def create_category(name: str, slug: str, description: str = "", *, session: Session) -> Category:
    name, slug, description = validate_category(name, slug, description)
    check_category_uniqueness(name, slug, session=session)
    category = Category.create(session=session, name=name, slug=slug, description=description)
    logger.info(f"Category created: id={category.id}, slug={slug!r}")
    return category


def get_category(category_id: int, *, session: Session) -> Category:
    return Category.get(category_id, session=session)


def get_category_by_slug(slug: str, *, session: Session) -> Category:
    category = Category.query(session=session).filter(Category.slug == slug).one_or_none()
    if category is None:
        raise ObjectNotFound(Category, slug)
    return category


def list_categories(*, session: Session) -> list[Category]:
    return Category.query(session=session).order_by(Category.name).all()


def update_category(
    category_id: int,
    *,
    name: str | None = None,
    slug: str | None = None,
    description: str | None = None,
    session: Session,
) -> Category:
    category = get_category(category_id, session=session)
    name, slug, description = validate_category(
        category.name if name is None else name,
        category.slug if slug is None else slug,
        category.description if description is None else description,
    )
    check_category_uniqueness(name, slug, exclude_id=category_id, session=session)
    return Category.update(category_id, session=session, name=name, slug=slug, description=description)


def delete_category(category_id: int, *, session: Session) -> None:
    Category.delete(category_id, session=session)
    logger.info(f"Category deleted: id={category_id}")


def assign_post_to_category(post_id: int, category_id: int, *, session: Session) -> None:
    """Adding a post to a category it is already in does nothing"""
    post = Post.get(post_id, session=session)
    category = get_category(category_id, session=session)
    if category not in post.categories:
        post.categories.append(category)
        session.flush()


def remove_post_from_category(post_id: int, category_id: int, *, session: Session) -> None:
    post = Post.get(post_id, session=session)
    post.categories = [category for category in post.categories if category.id != category_id]
    session.flush()


def post_categories(post_id: int, *, session: Session) -> list[Category]:
    return Post.get(post_id, session=session).categories


def category_posts(category_id: int, limit: int, offset: int, *, session: Session) -> list[Post]:
    return list_posts(limit, offset, category_id=category_id, session=session)
