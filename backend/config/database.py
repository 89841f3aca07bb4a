"""
Database Configuration
======================

Centralized PostgreSQL connection configuration for the API server.
"""
from typing import Optional
from dataclasses import dataclass

from .settings import Settings, get_settings


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""
    host: str
    port: int
    user: str
    password: str
    database: str
    min_size: int = 2
    max_size: int = 10

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'PostgresConfig':
        """Create config from application settings."""
        settings = settings or get_settings()
        return cls(
            host=settings.postgres_host,
            port=settings.postgres_port,
            user=settings.postgres_user,
            password=settings.postgres_password,
            database=settings.postgres_db,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    def to_asyncpg_kwargs(self) -> dict:
        """Convert to asyncpg.create_pool kwargs."""
        return {
            'host': self.host,
            'port': self.port,
            'user': self.user,
            'password': self.password,
            'database': self.database,
            'min_size': self.min_size,
            'max_size': self.max_size,
        }


def get_postgres_config() -> PostgresConfig:
    """Get PostgreSQL configuration from settings."""
    return PostgresConfig.from_settings()


async def create_postgres_pool():
    """Create PostgreSQL connection pool from settings."""
    import asyncpg
    config = get_postgres_config()
    return await asyncpg.create_pool(**config.to_asyncpg_kwargs())
