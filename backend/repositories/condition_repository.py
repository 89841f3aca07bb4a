"""
Condition Repository - PostgreSQL storage for variant conditions

Storage: PostgreSQL (conditions table)
"""
import logging
from typing import Dict, List, Optional, Sequence
import asyncpg

from models.domain.condition import Condition

logger = logging.getLogger(__name__)

CONDITION_COLUMNS = """
    c.id, c.variant_id, c.condition_type, c.operator, c.value, c.priority,
    c.created_at, c.updated_at
"""


def row_to_condition(row) -> Condition:
    return Condition(
        id=row['id'],
        variant_id=row['variant_id'],
        condition_type=row['condition_type'],
        operator=row['operator'],
        value=row['value'],
        priority=row['priority'],
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )


async def load_conditions(conn, variant_ids: Sequence[str]) -> Dict[str, List[Condition]]:
    """Load conditions for many variants at once, grouped by variant, in creation order"""
    grouped: Dict[str, List[Condition]] = {variant_id: [] for variant_id in variant_ids}
    if not variant_ids:
        return grouped

    rows = await conn.fetch(f"""
        SELECT {CONDITION_COLUMNS}
        FROM conditions c
        WHERE c.variant_id = ANY($1::text[])
        ORDER BY c.created_at, c.id
    """, list(variant_ids))

    for row in rows:
        grouped.setdefault(row['variant_id'], []).append(row_to_condition(row))
    return grouped


class ConditionRepository:
    """
    Repository for Condition domain model

    Ownership checks join through variant -> element -> website.
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_for_user(self, condition_id: str, user_id: str) -> Optional[Condition]:
        """
        Retrieve a condition if it belongs to one of the user's websites.

        Args:
            condition_id: Condition ID (cd_xxxxxxxx)
            user_id: Owner UUID

        Returns:
            Condition model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {CONDITION_COLUMNS}
                FROM conditions c
                JOIN variants v ON v.id = c.variant_id
                JOIN elements e ON e.id = v.element_id
                JOIN websites w ON w.id = e.website_id
                WHERE c.id = $1 AND w.user_id = $2
            """, condition_id, user_id)

            if not row:
                return None
            return row_to_condition(row)

    async def list_by_variant(self, variant_id: str) -> List[Condition]:
        """List a variant's conditions, lowest priority first."""
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch(f"""
                SELECT {CONDITION_COLUMNS}
                FROM conditions c
                WHERE c.variant_id = $1
                ORDER BY c.priority ASC, c.created_at
            """, variant_id)
            return [row_to_condition(row) for row in rows]

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, condition: Condition) -> Condition:
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                INSERT INTO conditions (
                    id, variant_id, condition_type, operator, value, priority,
                    created_at, updated_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, NOW(), NOW())
                RETURNING created_at, updated_at
            """,
                condition.id,
                condition.variant_id,
                condition.condition_type,
                condition.operator,
                condition.value,
                condition.priority
            )

            condition.created_at = row['created_at']
            condition.updated_at = row['updated_at']

            logger.info(f"Created condition {condition.id} on variant {condition.variant_id}")
            return condition

    async def update(self, condition: Condition) -> Condition:
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                UPDATE conditions
                SET condition_type = $2,
                    operator = $3,
                    value = $4,
                    priority = $5,
                    updated_at = NOW()
                WHERE id = $1
                RETURNING updated_at
            """,
                condition.id,
                condition.condition_type,
                condition.operator,
                condition.value,
                condition.priority
            )

            if row:
                condition.updated_at = row['updated_at']

            logger.info(f"Updated condition {condition.id}")
            return condition

    async def delete(self, condition_id: str) -> None:
        async with self.db_pool.acquire() as conn:
            await conn.execute("DELETE FROM conditions WHERE id = $1", condition_id)
            logger.info(f"Deleted condition {condition_id}")
