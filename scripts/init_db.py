"""
Initialize the token alerts key/value table.

Usage:
    python -m scripts.init_db

Requires DATABASE_URL in .env pointing to PostgreSQL.
"""
import asyncio
from sqlalchemy import text
from shared.database import engine

SCHEMA_SQL = """
-- Heartbeat counter and threshold config live here, one row per storage key
CREATE TABLE IF NOT EXISTS token_alert_kv (
    key VARCHAR(128) PRIMARY KEY,
    json_value JSON,
    number_value BIGINT,
    created_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP
);
"""


async def init_database():
    if engine is None:
        print("ERROR: DATABASE_URL not configured. Set it in .env")
        return

    print("Connecting to database...")
    async with engine.begin() as conn:
        print("Running schema migration...")
        for statement in SCHEMA_SQL.split(";"):
            statement = statement.strip()
            if statement:
                await conn.execute(text(statement))
        print("All tables created successfully.")

    print("Database initialization complete.")


if __name__ == "__main__":
    asyncio.run(init_database())
