# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.errors import StorefrontError, PersistenceError
from storefront.utils.settings import DEBUG
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def error_body(message: str, details=None) -> dict:
    error = {"message": message}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": jsonable_encoder(error)}


async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message} ({exc.details})")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content=error_body("Validation Error", details))


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path} -> database error")
    err = PersistenceError(details=str(exc) if DEBUG else None)
    return JSONResponse(status_code=err.status_code, content=error_body(err.message, err.details))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} -> unhandled error")
    return JSONResponse(
        status_code=500,
        content=error_body("Internal Server Error", str(exc) if DEBUG else None),
    )


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
