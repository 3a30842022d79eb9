import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ClaimDeskError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClaimDeskError):
    """Malformed or missing input, raised before any database call."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ClaimDeskError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ClaimDeskError):
    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(ClaimDeskError):
    status_code = status.HTTP_401_UNAUTHORIZED


class StorageError(ClaimDeskError):
    """Object storage call failed. Never retried."""
    status_code = status.HTTP_502_BAD_GATEWAY


def _format_pydantic_errors(errors) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return ", ".join(parts)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ClaimDeskError)
    async def claimdesk_error_handler(request: Request, exc: ClaimDeskError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
            return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": f"Invalid data: {_format_pydantic_errors(errors)}", "errors": _jsonable(errors)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        # Full detail stays in the server log; the client gets the error class only
        logger.exception(f"Database error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Database error ({type(exc).__name__})."},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def _jsonable(errors):
    cleaned = []
    for err in errors:
        item = {k: v for k, v in err.items() if k in ("loc", "msg", "type")}
        item["loc"] = [str(p) for p in item.get("loc", ())]
        cleaned.append(item)
    return cleaned
