from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.exceptions import InvalidArgumentError, NotFoundError


def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses: NotFound -> 404, InvalidArgument -> 400."""
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
