"""
Repository dependencies shared by the API routers.

Each returns a repository bound to the shared asyncpg pool; tests swap them
out through app.dependency_overrides.
"""

from repositories import (
    get_db_pool,
    WebsiteRepository,
    ElementRepository,
    VariantRepository,
    ConditionRepository,
)


async def get_website_repository() -> WebsiteRepository:
    return WebsiteRepository(await get_db_pool())


async def get_element_repository() -> ElementRepository:
    return ElementRepository(await get_db_pool())


async def get_variant_repository() -> VariantRepository:
    return VariantRepository(await get_db_pool())


async def get_condition_repository() -> ConditionRepository:
    return ConditionRepository(await get_db_pool())
