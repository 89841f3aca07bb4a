"""
Website Repository - PostgreSQL storage for tenant websites

Storage: PostgreSQL (websites table)

Also serves the integration endpoint's snapshot read: an active website
with its full Element -> Variant -> Condition graph, loaded inside one
read-only repeatable-read transaction so the graph is consistent.
"""
import logging
from typing import List, Optional
import asyncpg

from models.domain.website import Website
from utils.id_generator import generate_api_key
from .element_repository import load_elements

logger = logging.getLogger(__name__)

WEBSITE_COLUMNS = """
    w.id, w.user_id, w.name, w.domain, w.api_key, w.active,
    w.created_at, w.updated_at
"""


def row_to_website(row) -> Website:
    return Website(
        id=row['id'],
        user_id=str(row['user_id']),
        name=row['name'],
        domain=row['domain'],
        api_key=row['api_key'],
        active=bool(row['active']),
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )


class WebsiteRepository:
    """
    Repository for Website domain model

    Handles website registration, API keys and the resolution snapshot.
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    # =========================================================================
    # INTEGRATION SNAPSHOT
    # =========================================================================

    async def find_active_by_api_key(self, api_key: str) -> Optional[Website]:
        """
        Load an active website with all elements, variants and conditions.

        Args:
            api_key: Website API key from the loader script

        Returns:
            Website snapshot, or None if the key is unknown or the site inactive
        """
        async with self.db_pool.acquire() as conn:
            async with conn.transaction(isolation='repeatable_read', readonly=True):
                row = await conn.fetchrow(f"""
                    SELECT {WEBSITE_COLUMNS}
                    FROM websites w
                    WHERE w.api_key = $1 AND w.active = TRUE
                """, api_key)

                if not row:
                    return None

                website = row_to_website(row)
                website.elements = await load_elements(conn, website.id)
                return website

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, website_id: str) -> Optional[Website]:
        """Retrieve a website without its elements."""
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {WEBSITE_COLUMNS}
                FROM websites w
                WHERE w.id = $1
            """, website_id)

            if not row:
                return None
            return row_to_website(row)

    async def get_with_elements(self, website_id: str) -> Optional[Website]:
        """Retrieve a website with its nested elements, variants and conditions."""
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {WEBSITE_COLUMNS}
                FROM websites w
                WHERE w.id = $1
            """, website_id)

            if not row:
                return None

            website = row_to_website(row)
            website.elements = await load_elements(conn, website.id)
            return website

    async def list_by_user(self, user_id: str) -> List[Website]:
        """List a user's websites, newest first."""
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch(f"""
                SELECT {WEBSITE_COLUMNS}
                FROM websites w
                WHERE w.user_id = $1
                ORDER BY w.created_at DESC
            """, user_id)
            return [row_to_website(row) for row in rows]

    async def domain_exists(self, user_id: str, domain: str,
                            exclude_id: Optional[str] = None) -> bool:
        """Check whether the user already registered this domain (optionally ignoring one website)."""
        async with self.db_pool.acquire() as conn:
            found = await conn.fetchval("""
                SELECT EXISTS (
                    SELECT 1 FROM websites
                    WHERE user_id = $1 AND domain = $2 AND id IS DISTINCT FROM $3
                )
            """, user_id, domain, exclude_id)
            return bool(found)

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, website: Website) -> Website:
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                INSERT INTO websites (
                    id, user_id, name, domain, api_key, active,
                    created_at, updated_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, NOW(), NOW())
                RETURNING created_at, updated_at
            """,
                website.id,
                website.user_id,
                website.name,
                website.domain,
                website.api_key,
                website.active
            )

            website.created_at = row['created_at']
            website.updated_at = row['updated_at']

            logger.info(f"Created website {website.id} ({website.domain}) for user {website.user_id}")
            return website

    async def update(self, website: Website) -> Website:
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                UPDATE websites
                SET name = $2,
                    domain = $3,
                    active = $4,
                    updated_at = NOW()
                WHERE id = $1
                RETURNING updated_at
            """,
                website.id,
                website.name,
                website.domain,
                website.active
            )

            if row:
                website.updated_at = row['updated_at']

            logger.info(f"Updated website {website.id} (active={website.active})")
            return website

    async def regenerate_api_key(self, website_id: str) -> str:
        """Issue a new API key; the old one stops working immediately."""
        api_key = generate_api_key()
        async with self.db_pool.acquire() as conn:
            await conn.execute("""
                UPDATE websites SET api_key = $2, updated_at = NOW() WHERE id = $1
            """, website_id, api_key)

        logger.info(f"Regenerated API key for website {website_id}")
        return api_key

    async def delete(self, website_id: str) -> None:
        """Delete a website; elements, variants and conditions cascade."""
        async with self.db_pool.acquire() as conn:
            await conn.execute("DELETE FROM websites WHERE id = $1", website_id)
            logger.info(f"Deleted website {website_id}")
