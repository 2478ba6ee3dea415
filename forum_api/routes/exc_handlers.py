import logging

import starlette.requests
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.responses import JSONResponse

from forum_api.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenAction,
    ObjectNotFound,
    PersistenceError,
    ValidationError,
)
from forum_api.schemas.base import StatusResponseModel

from .base import app


logger = logging.getLogger(__name__)


@app.exception_handler(ValidationError)
async def validation_error_handler(req: starlette.requests.Request, exc: ValidationError):
    return JSONResponse(
        content=StatusResponseModel(status="Error", message=exc.eng, ru=exc.ru).model_dump(), status_code=400
    )


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(req: starlette.requests.Request, exc: AuthenticationError):
    return JSONResponse(
        content=StatusResponseModel(status="Error", message=exc.eng, ru=exc.ru).model_dump(), status_code=401
    )


@app.exception_handler(ForbiddenAction)
async def forbidden_action_handler(req: starlette.requests.Request, exc: ForbiddenAction):
    return JSONResponse(
        content=StatusResponseModel(status="Error", message=exc.eng, ru=exc.ru).model_dump(), status_code=403
    )


@app.exception_handler(ObjectNotFound)
async def not_found_handler(req: starlette.requests.Request, exc: ObjectNotFound):
    return JSONResponse(
        content=StatusResponseModel(status="Error", message=exc.eng, ru=exc.ru).model_dump(), status_code=404
    )


@app.exception_handler(ConflictError)
async def conflict_handler(req: starlette.requests.Request, exc: ConflictError):
    return JSONResponse(
        content=StatusResponseModel(status="Error", message=exc.eng, ru=exc.ru).model_dump(), status_code=409
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(req: starlette.requests.Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {req.method} {req.url.path}: {exc.orig}")
    return JSONResponse(
        content=StatusResponseModel(
            status="Error",
            message="Conflict with a resource that already exists",
            ru="Конфликт с уже существующим ресурсом",
        ).model_dump(),
        status_code=409,
    )


@app.exception_handler(PersistenceError)
async def persistence_error_handler(req: starlette.requests.Request, exc: PersistenceError):
    logger.error(f"Persistence error on {req.method} {req.url.path}: {exc.__cause__!r}")
    return JSONResponse(
        content=StatusResponseModel(status="Error", message=exc.eng, ru=exc.ru).model_dump(), status_code=500
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(req: starlette.requests.Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {req.method} {req.url.path}", exc_info=exc)
    return JSONResponse(
        content=StatusResponseModel(
            status="Error", message="Internal server error", ru="Внутренняя ошибка сервера"
        ).model_dump(),
        status_code=500,
    )
