from fastapi import APIRouter, Depends, Query
from fastapi_sqlalchemy import db

from forum_api.exceptions import NotAdmin
from forum_api.models import Category, User
from forum_api.routes.auth import require_user
from forum_api.schemas.base import StatusResponseModel
from forum_api.schemas.models import CategoryGet, CategoryGetWithPosts, CategoryPatch, CategoryPost, PostGet
from forum_api.settings import Settings, get_settings
from forum_api.utils.category import (
    category_posts,
    create_category,
    delete_category,
    get_category_by_slug,
    list_categories,
    update_category,
)
from forum_api.utils.post import posts_count


settings: Settings = get_settings()
category = APIRouter(prefix="/category", tags=["Category"])


async def require_admin(user: User = Depends(require_user)) -> User:
    """Категориями управляют только пользователи из ADMIN_USER_IDS"""
    if user.id not in get_settings().ADMIN_USER_IDS:
        raise NotAdmin(Category)
    return user


@category.get("", response_model=list[CategoryGet])
async def get_categories() -> list[CategoryGet]:
    """Все категории по алфавиту"""
    return [CategoryGet.model_validate(c) for c in list_categories(session=db.session)]


@category.post("", response_model=CategoryGet)
async def create(category_info: CategoryPost, _: User = Depends(require_admin)) -> CategoryGet:
    new_category = create_category(
        category_info.name, category_info.slug, category_info.description, session=db.session
    )
    return CategoryGet.model_validate(new_category)


@category.get("/{slug}", response_model=CategoryGetWithPosts)
async def get(
    slug: str,
    limit: int = Query(default=settings.PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    offset: int = Query(default=0, ge=0),
) -> CategoryGetWithPosts:
    """
    Категория по slug вместе с ее постами, новые первыми
    """
    found = get_category_by_slug(slug, session=db.session)
    return CategoryGetWithPosts(
        **CategoryGet.model_validate(found).model_dump(),
        posts=[PostGet.model_validate(p) for p in category_posts(found.id, limit, offset, session=db.session)],
        limit=limit,
        offset=offset,
        total=posts_count(category_id=found.id, session=db.session),
    )


@category.patch("/{id}", response_model=CategoryGet)
async def update(id: int, category_info: CategoryPatch, _: User = Depends(require_admin)) -> CategoryGet:
    updated = update_category(id, session=db.session, **category_info.model_dump(exclude_unset=True))
    return CategoryGet.model_validate(updated)


@category.delete("/{id}", response_model=StatusResponseModel)
async def delete(id: int, _: User = Depends(require_admin)) -> StatusResponseModel:
    delete_category(id, session=db.session)
    return StatusResponseModel(status="Success", message="Category has been deleted", ru="Категория удалена")
