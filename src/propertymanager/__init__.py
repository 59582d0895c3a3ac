"""FastAPI application factory for the property manager backend."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from aiosqlite import connect as aiosqlite_connect
from fastapi import APIRouter, FastAPI

from .config import configure_logging, load_config_from_env
from .users import SQLiteUserStore, UserService, configure_users_router

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from .config import AppConfig

LOGGER = logging.getLogger(__name__)

API_TITLE = "Property Manager API"


def configure_fastapi_app(config: AppConfig) -> FastAPI:
    """Configure and return the FastAPI application.

    :param config: Application configuration
    :return: Configured FastAPI application
    """
    database_dir = Path(config.database_path).parent
    if not database_dir.exists():
        database_dir.mkdir(parents=True, exist_ok=True)
        LOGGER.info("Created directory for database at %s", database_dir)

    if not Path(config.database_path).exists():
        LOGGER.info("Database file does not exist at %s", config.database_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[Any, Any]:
        """Application lifespan manager.

        Opens the database, prepares the user service and ensures the
        default administrator exists before requests are served.
        """
        LOGGER.info("%s is starting", API_TITLE)

        async with aiosqlite_connect(config.database_path) as db_connection:
            user_store = SQLiteUserStore(db_connection)
            await user_store.initialize_tables()

            user_service = UserService(
                user_store,
                config.password_hasher,
                config.admin_config,
            )

            if config.create_default_admin:
                await user_service.create_default_admin_user()
            else:
                LOGGER.info("Default admin creation is disabled")

            app.state.user_service = user_service

            yield

            LOGGER.info("%s is shutting down", API_TITLE)

    app = FastAPI(
        title=API_TITLE,
        version="0.1.0",
        lifespan=lifespan,
        root_path=config.root_path,
    )

    @app.get("/")
    def read_root() -> str:
        return API_TITLE

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(
        configure_users_router(APIRouter()),
        prefix="/users",
        tags=["users"],
    )

    return app


def create_app(env_file: str | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Without an explicit path the ENV_FILE environment variable is used,
    falling back to .env, which suits uvicorn command line usage.

    :param env_file: Optional path to the environment configuration file
    :return: Configured FastAPI application
    """
    if env_file is None:
        env_file = os.environ.get("ENV_FILE", ".env")
    config = load_config_from_env(env_file)
    configure_logging(config)
    return configure_fastapi_app(config)


__all__ = ["configure_fastapi_app", "create_app", "load_config_from_env"]
