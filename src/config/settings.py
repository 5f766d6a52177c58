"""
Configuration settings for the Users Backend
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

MEMORY_DATABASE_URL = "memory://"


def _env_bool(value: Optional[str], default: bool = False) -> bool:
    """Interpret common truthy strings from the environment"""
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Process configuration, built once and handed to the app factory"""

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    database_url: str = MEMORY_DATABASE_URL
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    require_admin_for_writes: bool = False
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    port: int = 8080
    log_level: str = "INFO"

    @property
    def uses_memory_store(self) -> bool:
        return self.database_url == MEMORY_DATABASE_URL

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """
        Build settings from environment variables

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance

        Raises:
            ValueError: If JWT_SECRET is missing
        """
        env = os.environ if environ is None else environ

        jwt_secret = env.get("JWT_SECRET")
        if not jwt_secret:
            raise ValueError("JWT_SECRET environment variable is required")

        origins = [
            origin.strip()
            for origin in env.get("ALLOWED_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        settings = cls(
            jwt_secret=jwt_secret,
            jwt_algorithm=env.get("JWT_ALGORITHM", "HS256"),
            database_url=env.get("DATABASE_URL", MEMORY_DATABASE_URL),
            db_pool_min_size=int(env.get("DB_POOL_MIN_SIZE", 2)),
            db_pool_max_size=int(env.get("DB_POOL_MAX_SIZE", 10)),
            require_admin_for_writes=_env_bool(env.get("REQUIRE_ADMIN_FOR_WRITES")),
            allowed_origins=origins or ["*"],
            port=int(env.get("PORT", 8080)),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

        if settings.uses_memory_store:
            logger.warning("DATABASE_URL not set - using in-memory user store (data is not persisted)")

        return settings
