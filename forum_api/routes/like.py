from fastapi import APIRouter, Depends
from fastapi_sqlalchemy import db

from forum_api.exceptions import ObjectNotFound
from forum_api.models import Reaction, Target, TargetType, User
from forum_api.routes.auth import get_current_user, require_user
from forum_api.schemas.base import StatusResponseModel
from forum_api.schemas.models import LikeGet, LikeStats
from forum_api.utils.reaction import check_target_exists, reaction_stats, remove_reaction, set_reaction, user_reaction


like = APIRouter(prefix="/like", tags=["Like"])


@like.get("/{target_type}/{id}", response_model=LikeGet)
async def get_likes(id: int, target_type: TargetType, user: User | None = Depends(get_current_user)) -> LikeGet:
    """
    Количество лайков и дизлайков поста или комментария и реакция текущего пользователя
    """
    target = Target(target_type, id)
    check_target_exists(target, session=db.session)
    result = LikeGet(**reaction_stats(target, session=db.session).model_dump())
    if user is not None:
        try:
            result.reaction = user_reaction(user.id, target, session=db.session).reaction
        except ObjectNotFound:
            pass
    return result


@like.put("/{target_type}/{id}/{reaction}", response_model=LikeStats)
async def react(id: int, target_type: TargetType, reaction: Reaction, user: User = Depends(require_user)) -> LikeStats:
    """
    Ставит лайк или дизлайк

    Противоположная реакция переключается на новую. Повторная такая же реакция возвращает 409
    """
    target = Target(target_type, id)
    check_target_exists(target, session=db.session)
    set_reaction(user.id, target, reaction, session=db.session)
    return reaction_stats(target, session=db.session)


@like.delete("/{target_type}/{id}", response_model=StatusResponseModel)
async def delete_like(id: int, target_type: TargetType, user: User = Depends(require_user)) -> StatusResponseModel:
    """
    Удалить свою реакцию на пост или комментарий
    """
    remove_reaction(user.id, Target(target_type, id), session=db.session)
    return StatusResponseModel(status="Success", message="Reaction has been deleted", ru="Реакция удалена")
