"""FastAPI application exposing the Chirpy HTTP surface."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from pathlib import Path

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, field_validator

from .chirps import validate_chirp
from .config import Settings
from .database import Database
from .errors import ChirpyError, DecodeError, UnauthorizedError
from .metrics import MetricsMiddleware, RequestCounter, render_metrics_page
from .models import User
from .security import AdminAuth
from .users import UserService, UserStore

logger = logging.getLogger("chirpy.api")


def _null_to_empty(value: object) -> object:
    return "" if value is None else value


class CreateUserRequest(BaseModel):
    email: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: object) -> object:
        return _null_to_empty(value)


class UserResponse(BaseModel):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    email: str


class ChirpRequest(BaseModel):
    body: str = ""

    @field_validator("body", mode="before")
    @classmethod
    def _normalize_body(cls, value: object) -> object:
        return _null_to_empty(value)


class CleanedChirpResponse(BaseModel):
    cleaned_body: str


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        created_at=user.created_at,
        updated_at=user.updated_at,
        email=user.email,
    )


def error_response(exc: ChirpyError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=f"error: {exc.message}",
        headers=headers,
    )


def _mount_static(
    app: FastAPI,
    path: str,
    directory: Path,
    counter: RequestCounter,
    *,
    name: str,
    html: bool,
) -> None:
    if not directory.is_dir():
        logger.warning("Static directory %s does not exist; %s will not be served", directory, path)
        return
    files = StaticFiles(directory=str(directory), html=html)
    app.mount(path, MetricsMiddleware(files, counter), name=name)


def create_app(
    *,
    settings: Settings | None = None,
    database: UserStore | None = None,
    counter: RequestCounter | None = None,
) -> FastAPI:
    """Instantiate the Chirpy application.

    ``database`` may be any object with a ``create_user(email)`` method; when
    omitted a SQLite :class:`Database` is opened at ``settings.database_path``.
    """

    settings = settings or Settings.defaults()

    if database is None:
        sqlite_db = Database(settings.database_path)
        sqlite_db.initialize()
        database = sqlite_db

    hits = counter or RequestCounter()
    users = UserService(database)
    admin_auth = AdminAuth(settings.admin_tokens)

    app = FastAPI(
        title="Chirpy",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.counter = hits

    def get_counter() -> RequestCounter:
        return hits

    def get_user_service() -> UserService:
        return users

    @app.get("/api/healthz", response_class=PlainTextResponse)
    async def healthcheck() -> PlainTextResponse:
        return PlainTextResponse("OK")

    @app.post(
        "/api/users",
        response_model=UserResponse,
        status_code=status.HTTP_201_CREATED,
    )
    def create_user(
        payload: CreateUserRequest,
        service: UserService = Depends(get_user_service),
    ) -> UserResponse:
        user = service.create_user(payload.email)
        return user_to_response(user)

    @app.post("/api/validate_chirp", response_model=CleanedChirpResponse)
    async def validate_chirp_body(payload: ChirpRequest) -> CleanedChirpResponse:
        return CleanedChirpResponse(cleaned_body=validate_chirp(payload.body))

    @app.get(
        "/admin/metrics",
        response_class=HTMLResponse,
        dependencies=[Depends(admin_auth)],
    )
    async def read_metrics(counter: RequestCounter = Depends(get_counter)) -> HTMLResponse:
        return HTMLResponse(render_metrics_page(counter.read()))

    @app.post(
        "/admin/reset",
        response_class=PlainTextResponse,
        dependencies=[Depends(admin_auth)],
    )
    async def reset_metrics(counter: RequestCounter = Depends(get_counter)) -> PlainTextResponse:
        previous = counter.reset()
        logger.info("Hit counter reset (was %s)", previous)
        return PlainTextResponse("Reset applied")

    @app.exception_handler(ChirpyError)
    async def handle_chirpy_error(_: Request, exc: ChirpyError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_decode_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Error decoding request body for %s: %s", request.url.path, exc.errors())
        return error_response(DecodeError())

    _mount_static(app, "/app/assets", settings.assets_dir, hits, name="assets", html=False)
    _mount_static(app, "/app", settings.public_dir, hits, name="app", html=True)

    return app


__all__ = [
    "create_app",
    "error_response",
    "user_to_response",
    "CreateUserRequest",
    "UserResponse",
    "ChirpRequest",
    "CleanedChirpResponse",
]
