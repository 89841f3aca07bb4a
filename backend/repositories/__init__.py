"""
Repository Pattern - Storage abstraction layer

Repositories hide storage details (PostgreSQL) from business logic.
Consumers work with domain models, not asyncpg records.

Storage:
- WebsiteRepository: websites + the integration snapshot read
- ElementRepository: elements (created with their default variant)
- VariantRepository: variants (one default per element)
- ConditionRepository: conditions
"""
import asyncpg

from config import create_postgres_pool

from .website_repository import WebsiteRepository
from .element_repository import ElementRepository
from .variant_repository import VariantRepository
from .condition_repository import ConditionRepository

# Shared database connection pool (initialized on first use)
db_pool = None


async def get_db_pool() -> asyncpg.Pool:
    """Get or create shared database connection pool"""
    global db_pool
    if db_pool is None:
        db_pool = await create_postgres_pool()
    return db_pool


async def close_db_pool() -> None:
    """Close the shared pool (application shutdown)"""
    global db_pool
    if db_pool is not None:
        await db_pool.close()
        db_pool = None


__all__ = [
    'WebsiteRepository',
    'ElementRepository',
    'VariantRepository',
    'ConditionRepository',
    'db_pool',
    'get_db_pool',
    'close_db_pool',
]
