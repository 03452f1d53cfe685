"""Translate domain and validation errors into JSON responses."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from animecards.core.errors import AnimeCardsError, InternalFailure

logger = logging.getLogger(__name__)


async def _domain_error(_: Request, exc: AnimeCardsError) -> JSONResponse:
    if isinstance(exc, InternalFailure):
        logger.error("Internal failure: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request data", "errors": errors},
    )


async def _store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Store details stay in the log, never in the response
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": InternalFailure.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AnimeCardsError, _domain_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(SQLAlchemyError, _store_error)
