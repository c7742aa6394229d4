"""FastAPI application: wires the router, maps domain errors to HTTP responses and sets up logging."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.core.config import settings
from src.core.exceptions import (
    GameError,
    NotAPlayerError,
    NotYourTurnError,
    RepositoryError,
    StaleGameError,
)
from src.db.database import init_db

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[GameError], int] = {
    RepositoryError: status.HTTP_404_NOT_FOUND,
    NotYourTurnError: status.HTTP_403_FORBIDDEN,
    NotAPlayerError: status.HTTP_403_FORBIDDEN,
    StaleGameError: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    init_db()
    logger.info("Database ready")
    yield


app = FastAPI(title="Checkers game backend", lifespan=lifespan)
app.include_router(router)


@app.exception_handler(GameError)
async def game_error_handler(_request: Request, exc: GameError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info("Request rejected (%s): %s", exc.code, exc)
    return JSONResponse(
        status_code=status_code, content={"error": exc.code, "message": str(exc)}
    )
