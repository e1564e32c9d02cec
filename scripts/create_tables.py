#!/usr/bin/env python
"""Create the employees table in the configured database.

Intended for development databases; the statement is a no-op if the table
already exists.
"""

import asyncio

from employee_api.config import get_settings
from employee_api.database import create_engine
from employee_api.models.orm import Base


async def create_tables() -> None:
    """Create all ORM tables."""
    settings = get_settings()
    engine = create_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()
    print("Tables created")


if __name__ == "__main__":
    asyncio.run(create_tables())
