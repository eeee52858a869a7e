"""
Leaderboard HTTP API.

- ``GET /scores``: top scores, highest first
- ``POST /scores``: record a finished game
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pesta_ikan.fish_core.config_loader import GameConfig, get_config
from pesta_ikan.leaderboard.schemas import ErrorMessage, ScoreInput, ScoreOut
from pesta_ikan.leaderboard.storage import DatabaseStorage, ScoreStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scores"])


def get_storage(request: Request) -> ScoreStorage:
    return request.app.state.storage


def get_top_n(request: Request) -> int:
    return request.app.state.top_n


@router.get("/scores", response_model=List[ScoreOut])
def list_scores(
    storage: ScoreStorage = Depends(get_storage),
    top_n: int = Depends(get_top_n),
):
    logger.info("GET /scores (top %d)", top_n)
    return [ScoreOut.model_validate(row) for row in storage.get_scores(limit=top_n)]


@router.post(
    "/scores",
    response_model=ScoreOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorMessage}},
)
def create_score(body: ScoreInput, storage: ScoreStorage = Depends(get_storage)):
    logger.info("POST /scores username=%s score=%d", body.username, body.score)
    return ScoreOut.model_validate(storage.create_score(body))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first validation problem as ``400 {message, field}``."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [part for part in first.get("loc", ()) if part != "body"]
    message = str(first.get("msg", "Invalid request"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]

    body = ErrorMessage(
        message=message,
        field=".".join(str(part) for part in loc) or None,
    )
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, body.message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorMessage(message=str(exc.detail)).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


def create_app(
    storage: Optional[ScoreStorage] = None,
    config: Optional[GameConfig] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        storage: Score storage. A DatabaseStorage on the configured
            database_url (tables created) if None.
        config: Game configuration. Uses default if None.

    Returns:
        Configured FastAPI app.
    """
    if config is None:
        config = get_config()

    if storage is None:
        storage = DatabaseStorage(database_url=config.leaderboard.database_url)
        storage.create_tables()

    app = FastAPI(title="Pesta Ikan Leaderboard")
    app.state.storage = storage
    app.state.top_n = config.leaderboard.top_n

    app.include_router(router)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    return app
