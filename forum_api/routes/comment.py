from fastapi import APIRouter, Depends, Query
from fastapi_sqlalchemy import db

from forum_api.models import Post, User
from forum_api.routes.auth import require_user
from forum_api.schemas.base import StatusResponseModel
from forum_api.schemas.models import CommentGet, CommentGetAll, CommentPatch, CommentPost
from forum_api.settings import Settings, get_settings
from forum_api.utils.comment import (
    comments_count,
    create_comment,
    delete_comment,
    get_comment,
    post_comments,
    update_comment,
)


settings: Settings = get_settings()
comment = APIRouter(tags=["Comment"])


@comment.get("/post/{post_id}/comment", response_model=CommentGetAll)
async def get_comments(
    post_id: int,
    limit: int = Query(default=settings.PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    offset: int = Query(default=0, ge=0),
) -> CommentGetAll:
    """
    Комментарии к посту в порядке написания

    `limit` - максимальное количество возвращаемых комментариев

    `offset` - смещение, с какого по порядку комментария начинать выборку
    """
    Post.get(post_id, session=db.session)
    comments = post_comments(post_id, limit, offset, session=db.session)
    return CommentGetAll(
        comments=[CommentGet.model_validate(c) for c in comments],
        limit=limit,
        offset=offset,
        total=comments_count(post_id, session=db.session),
    )


@comment.post("/post/{post_id}/comment", response_model=CommentGet)
async def create(post_id: int, comment_info: CommentPost, user: User = Depends(require_user)) -> CommentGet:
    new_comment = create_comment(comment_info.content, post_id, user.id, session=db.session)
    return CommentGet.model_validate(new_comment)


@comment.get("/comment/{id}", response_model=CommentGet)
async def get(id: int) -> CommentGet:
    return CommentGet.model_validate(get_comment(id, session=db.session))


@comment.patch("/comment/{id}", response_model=CommentGet)
async def update(id: int, comment_info: CommentPatch, user: User = Depends(require_user)) -> CommentGet:
    """Позволяет автору изменить свой комментарий"""
    return CommentGet.model_validate(update_comment(id, comment_info.content, user.id, session=db.session))


@comment.delete("/comment/{id}", response_model=StatusResponseModel)
async def delete(id: int, user: User = Depends(require_user)) -> StatusResponseModel:
    delete_comment(id, user.id, session=db.session)
    return StatusResponseModel(status="Success", message="Comment has been deleted", ru="Комментарий удален")
