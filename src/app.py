"""
Users Backend API Server
Core functionality: JWT-guarded CRUD for user records
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings
from database.connection import init_database, close_database
from api.routes import health, users
from services.jwt_service import JWTService
from services.user_store import InMemoryUserStore, PostgresUserStore, UserStore
from services.users_service import UsersService
from utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(settings: Settings, store: Optional[UserStore] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Process configuration
        store: User store to use; chosen from settings.database_url when omitted

    Returns:
        Configured FastAPI application
    """
    logging.basicConfig(level=settings.log_level)

    owns_database = store is None and not settings.uses_memory_store
    if store is None:
        store = InMemoryUserStore() if settings.uses_memory_store else PostgresUserStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        if owns_database:
            await init_database(
                settings.database_url,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size
            )
        yield
        if owns_database:
            await close_database()

    app = FastAPI(
        title="Users Backend",
        description="Backend API for user management guarded by JWT bearer tokens",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.jwt_service = JWTService(settings.jwt_secret, [settings.jwt_algorithm])
    app.state.users_service = UsersService(store)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, prefix="/users", tags=["Users"])

    logger.info(f"Users Backend configured with {type(store).__name__}")
    return app
