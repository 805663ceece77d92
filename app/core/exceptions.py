# app/core/exceptions.py
# 統一錯誤回應格式：
#   - 一般錯誤   -> {"msg": "..."}
#   - 欄位驗證   -> {"errors": [{"msg", "param", "location", ...}]}
#   - 資料庫錯誤 -> 500 {"msg": "Server Error"} (細節只寫入 log)
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"msg": exc.detail}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Pydantic 的型別錯誤也以 400 + 欄位錯誤列表回應，與必填檢查一致
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        errors.append({
            "msg": error.get("msg"),
            "param": str(loc[-1]) if loc else None,
            "location": str(loc[0]) if loc else None,
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": errors},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": "Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
