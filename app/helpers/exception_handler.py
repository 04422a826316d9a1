import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from app.schemas.sche_base import ResponseSchemaBase

logger = logging.getLogger(__name__)


class MalformedSessionError(ValueError):
    """A session record failed shape validation and cannot be loaded."""


class CustomException(Exception):
    http_code: int
    code: str
    message: str

    def __init__(self, http_code: int = None, code: str = None, message: str = None):
        self.http_code = http_code if http_code else 500
        self.code = code if code else str(self.http_code)
        self.message = message
        super().__init__(message)


async def http_exception_handler(request: Request, exc: CustomException):
    logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.http_code, exc.message)
    return JSONResponse(
        status_code=exc.http_code,
        content=jsonable_encoder(ResponseSchemaBase().custom_response(exc.code, False, exc.message))
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = '; '.join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(ResponseSchemaBase().custom_response('422', False, message))
    )
