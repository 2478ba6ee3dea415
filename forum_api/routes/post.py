from fastapi import APIRouter, Depends, Query
from fastapi_sqlalchemy import db

from forum_api.exceptions import ObjectNotFound
from forum_api.models import Target, User
from forum_api.routes.auth import get_current_user, require_user
from forum_api.schemas.base import StatusResponseModel
from forum_api.schemas.models import CommentGet, PostGet, PostGetAll, PostGetWithComments, PostPatch, PostPost
from forum_api.settings import Settings, get_settings
from forum_api.utils.category import get_category_by_slug
from forum_api.utils.comment import post_comments
from forum_api.utils.post import create_post, delete_post, get_post, list_posts, posts_count, update_post
from forum_api.utils.reaction import user_reaction


settings: Settings = get_settings()
post = APIRouter(prefix="/post", tags=["Post"])


@post.get("", response_model=PostGetAll)
async def get_posts(
    limit: int = Query(default=settings.PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    offset: int = Query(default=0, ge=0),
    category: str | None = None,
) -> PostGetAll:
    """
    Возвращает посты, новые первыми

    `category` - slug категории, вернет только посты этой категории
    """
    category_id = get_category_by_slug(category, session=db.session).id if category else None
    posts = list_posts(limit, offset, category_id=category_id, session=db.session)
    return PostGetAll(
        posts=[PostGet.model_validate(p) for p in posts],
        limit=limit,
        offset=offset,
        total=posts_count(category_id=category_id, session=db.session),
    )


@post.post("", response_model=PostGet)
async def create(post_info: PostPost, user: User = Depends(require_user)) -> PostGet:
    new_post = create_post(post_info.title, post_info.content, user.id, post_info.category_ids, session=db.session)
    return PostGet.model_validate(new_post)


@post.get("/{id}", response_model=PostGetWithComments)
async def get(id: int, user: User | None = Depends(get_current_user)) -> PostGetWithComments:
    """
    Возвращает пост с категориями, комментариями и реакцией текущего пользователя
    """
    found = get_post(id, session=db.session)
    result = PostGetWithComments.model_validate(found)
    result.comments = [CommentGet.model_validate(c) for c in post_comments(id, session=db.session)]
    if user is not None:
        try:
            result.reaction = user_reaction(user.id, Target.post(id), session=db.session).reaction
        except ObjectNotFound:
            result.reaction = None
    return result


@post.patch("/{id}", response_model=PostGet)
async def update(id: int, post_info: PostPatch, user: User = Depends(require_user)) -> PostGet:
    """Позволяет автору изменить свой пост"""
    updated = update_post(id, user.id, session=db.session, **post_info.model_dump(exclude_unset=True))
    return PostGet.model_validate(updated)


@post.delete("/{id}", response_model=StatusResponseModel)
async def delete(id: int, user: User = Depends(require_user)) -> StatusResponseModel:
    delete_post(id, user.id, session=db.session)
    return StatusResponseModel(status="Success", message="Post has been deleted", ru="Пост удален")
