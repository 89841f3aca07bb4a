"""
PostgreSQL schema for the tenant graph.

Website 1-* Element 1-* Variant 1-* Condition, cascading downward.
Applied at startup only when AUTO_CREATE_SCHEMA is enabled.
"""
import logging

import asyncpg

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS websites (
    id          TEXT PRIMARY KEY,
    user_id     TEXT NOT NULL,
    name        TEXT NOT NULL,
    domain      TEXT NOT NULL,
    api_key     TEXT NOT NULL UNIQUE,
    active      BOOLEAN NOT NULL DEFAULT TRUE,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS idx_websites_user ON websites (user_id);

CREATE TABLE IF NOT EXISTS elements (
    id          TEXT PRIMARY KEY,
    website_id  TEXT NOT NULL REFERENCES websites (id) ON DELETE CASCADE,
    selector    TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS idx_elements_website ON elements (website_id);

CREATE TABLE IF NOT EXISTS variants (
    id          TEXT PRIMARY KEY,
    element_id  TEXT NOT NULL REFERENCES elements (id) ON DELETE CASCADE,
    name        TEXT NOT NULL,
    content     TEXT NOT NULL DEFAULT '',
    is_default  BOOLEAN NOT NULL DEFAULT FALSE,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS idx_variants_element ON variants (element_id);
CREATE UNIQUE INDEX IF NOT EXISTS uq_variants_one_default
    ON variants (element_id) WHERE is_default;

CREATE TABLE IF NOT EXISTS conditions (
    id             TEXT PRIMARY KEY,
    variant_id     TEXT NOT NULL REFERENCES variants (id) ON DELETE CASCADE,
    condition_type TEXT NOT NULL,
    operator       TEXT NOT NULL,
    value          TEXT NOT NULL,
    priority       INTEGER NOT NULL DEFAULT 0,
    created_at     TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at     TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS idx_conditions_variant ON conditions (variant_id);
"""


async def ensure_schema(db_pool: asyncpg.Pool) -> None:
    """Create tables and indexes if they do not exist"""
    async with db_pool.acquire() as conn:
        await conn.execute(SCHEMA_SQL)
    logger.info("Database schema ensured")
