"""
Variant Repository - PostgreSQL storage for element variants

Storage: PostgreSQL (variants table)

Keeps the one-default-per-element invariant: whenever a variant becomes the
default, the previous default is cleared in the same transaction.
"""
import logging
from typing import Dict, List, Optional, Sequence
import asyncpg

from models.domain.variant import Variant
from .condition_repository import load_conditions

logger = logging.getLogger(__name__)

VARIANT_COLUMNS = """
    v.id, v.element_id, v.name, v.content, v.is_default,
    v.created_at, v.updated_at
"""


def row_to_variant(row) -> Variant:
    return Variant(
        id=row['id'],
        element_id=row['element_id'],
        name=row['name'],
        content=row['content'],
        is_default=bool(row['is_default']),
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )


async def load_variants(conn, element_ids: Sequence[str]) -> Dict[str, List[Variant]]:
    """Load variants (with conditions) for many elements, grouped by element, in creation order"""
    grouped: Dict[str, List[Variant]] = {element_id: [] for element_id in element_ids}
    if not element_ids:
        return grouped

    rows = await conn.fetch(f"""
        SELECT {VARIANT_COLUMNS}
        FROM variants v
        WHERE v.element_id = ANY($1::text[])
        ORDER BY v.created_at, v.id
    """, list(element_ids))

    variants = [row_to_variant(row) for row in rows]
    conditions = await load_conditions(conn, [v.id for v in variants])
    for variant in variants:
        variant.conditions = conditions.get(variant.id, [])
        grouped.setdefault(variant.element_id, []).append(variant)
    return grouped


class VariantRepository:
    """
    Repository for Variant domain model
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_for_user(self, variant_id: str, user_id: str) -> Optional[Variant]:
        """
        Retrieve a variant (with conditions) if the user owns its website.

        Args:
            variant_id: Variant ID (vr_xxxxxxxx)
            user_id: Owner UUID

        Returns:
            Variant model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {VARIANT_COLUMNS}
                FROM variants v
                JOIN elements e ON e.id = v.element_id
                JOIN websites w ON w.id = e.website_id
                WHERE v.id = $1 AND w.user_id = $2
            """, variant_id, user_id)

            if not row:
                return None

            variant = row_to_variant(row)
            conditions = await load_conditions(conn, [variant.id])
            variant.conditions = conditions[variant.id]
            return variant

    async def list_by_element(self, element_id: str) -> List[Variant]:
        """List an element's variants with conditions, default first."""
        async with self.db_pool.acquire() as conn:
            grouped = await load_variants(conn, [element_id])
        variants = grouped[element_id]
        # Stable sort keeps creation order within each group
        return sorted(variants, key=lambda v: not v.is_default)

    async def count_by_element(self, element_id: str) -> int:
        async with self.db_pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT COUNT(*) FROM variants WHERE element_id = $1", element_id
            )

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, variant: Variant) -> Variant:
        """
        Create a variant. If it is flagged default, the element's previous
        default is cleared atomically.
        """
        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                if variant.is_default:
                    await self._clear_default(conn, variant.element_id)

                row = await conn.fetchrow("""
                    INSERT INTO variants (
                        id, element_id, name, content, is_default,
                        created_at, updated_at
                    )
                    VALUES ($1, $2, $3, $4, $5, NOW(), NOW())
                    RETURNING created_at, updated_at
                """,
                    variant.id,
                    variant.element_id,
                    variant.name,
                    variant.content,
                    variant.is_default
                )

            variant.created_at = row['created_at']
            variant.updated_at = row['updated_at']

            logger.info(f"Created variant {variant.id} on element {variant.element_id}")
            return variant

    async def update(self, variant: Variant, make_default: bool = False) -> Variant:
        """
        Update name/content. With make_default, moves the element's default
        to this variant in the same transaction.
        """
        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                if make_default:
                    await self._clear_default(conn, variant.element_id, keep_id=variant.id)
                    variant.is_default = True

                row = await conn.fetchrow("""
                    UPDATE variants
                    SET name = $2,
                        content = $3,
                        is_default = $4,
                        updated_at = NOW()
                    WHERE id = $1
                    RETURNING updated_at
                """,
                    variant.id,
                    variant.name,
                    variant.content,
                    variant.is_default
                )

            if row:
                variant.updated_at = row['updated_at']

            logger.info(f"Updated variant {variant.id}")
            return variant

    async def delete(self, variant_id: str) -> None:
        async with self.db_pool.acquire() as conn:
            await conn.execute("DELETE FROM variants WHERE id = $1", variant_id)
            logger.info(f"Deleted variant {variant_id}")

    @staticmethod
    async def _clear_default(conn, element_id: str, keep_id: Optional[str] = None) -> None:
        await conn.execute("""
            UPDATE variants
            SET is_default = FALSE, updated_at = NOW()
            WHERE element_id = $1 AND is_default AND id IS DISTINCT FROM $2
        """, element_id, keep_id)
