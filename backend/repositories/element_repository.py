"""
Element Repository - PostgreSQL storage for tracked page elements

Storage: PostgreSQL (elements table)
"""
import logging
from typing import List, Optional
import asyncpg

from models.domain.element import Element, DEFAULT_VARIANT_NAME, DEFAULT_VARIANT_CONTENT
from models.domain.variant import Variant
from .variant_repository import load_variants

logger = logging.getLogger(__name__)

ELEMENT_COLUMNS = """
    e.id, e.website_id, e.selector, e.description,
    e.created_at, e.updated_at
"""


def row_to_element(row) -> Element:
    return Element(
        id=row['id'],
        website_id=row['website_id'],
        selector=row['selector'],
        description=row['description'] or "",
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )


async def load_elements(conn, website_id: str, newest_first: bool = False) -> List[Element]:
    """
    Load a website's elements with variants and conditions.

    Default order is creation order, which is the order the resolver walks.
    """
    order = "e.created_at DESC, e.id DESC" if newest_first else "e.created_at, e.id"
    rows = await conn.fetch(f"""
        SELECT {ELEMENT_COLUMNS}
        FROM elements e
        WHERE e.website_id = $1
        ORDER BY {order}
    """, website_id)

    elements = [row_to_element(row) for row in rows]
    variants = await load_variants(conn, [e.id for e in elements])
    for element in elements:
        element.variants = variants.get(element.id, [])
    return elements


class ElementRepository:
    """
    Repository for Element domain model
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_for_user(self, element_id: str, user_id: str) -> Optional[Element]:
        """
        Retrieve an element (with variants) if the user owns its website.

        Args:
            element_id: Element ID (el_xxxxxxxx)
            user_id: Owner UUID

        Returns:
            Element model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {ELEMENT_COLUMNS}
                FROM elements e
                JOIN websites w ON w.id = e.website_id
                WHERE e.id = $1 AND w.user_id = $2
            """, element_id, user_id)

            if not row:
                return None

            element = row_to_element(row)
            variants = await load_variants(conn, [element.id])
            element.variants = variants[element.id]
            return element

    async def list_by_website(self, website_id: str) -> List[Element]:
        """List a website's elements, newest first."""
        async with self.db_pool.acquire() as conn:
            return await load_elements(conn, website_id, newest_first=True)

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create_with_default_variant(self, element: Element) -> Element:
        """
        Create an element together with its placeholder default variant.

        Both rows are written in one transaction so an element never exists
        without a default.
        """
        default = Variant(
            id="",
            element_id=element.id,
            name=DEFAULT_VARIANT_NAME,
            content=DEFAULT_VARIANT_CONTENT,
            is_default=True,
        )

        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                row = await conn.fetchrow("""
                    INSERT INTO elements (
                        id, website_id, selector, description, created_at, updated_at
                    )
                    VALUES ($1, $2, $3, $4, NOW(), NOW())
                    RETURNING created_at, updated_at
                """,
                    element.id,
                    element.website_id,
                    element.selector,
                    element.description
                )

                variant_row = await conn.fetchrow("""
                    INSERT INTO variants (
                        id, element_id, name, content, is_default, created_at, updated_at
                    )
                    VALUES ($1, $2, $3, $4, TRUE, NOW(), NOW())
                    RETURNING created_at, updated_at
                """,
                    default.id,
                    element.id,
                    default.name,
                    default.content
                )

        element.created_at = row['created_at']
        element.updated_at = row['updated_at']
        default.created_at = variant_row['created_at']
        default.updated_at = variant_row['updated_at']
        element.variants = [default]

        logger.info(f"Created element {element.id} ({element.selector}) on website {element.website_id}")
        return element

    async def update(self, element: Element) -> Element:
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                UPDATE elements
                SET selector = $2,
                    description = $3,
                    updated_at = NOW()
                WHERE id = $1
                RETURNING updated_at
            """, element.id, element.selector, element.description)

            if row:
                element.updated_at = row['updated_at']

            logger.info(f"Updated element {element.id}")
            return element

    async def delete(self, element_id: str) -> None:
        """Delete an element; variants and conditions cascade."""
        async with self.db_pool.acquire() as conn:
            await conn.execute("DELETE FROM elements WHERE id = $1", element_id)
            logger.info(f"Deleted element {element_id}")
