# scripts/reset_db.py

import asyncio
import os
import sys

from loguru import logger

# Ensure project root (the folder containing 'app') is on sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from app.core.db import engine  # noqa: E402
from app.infrastructure.db import models  # noqa: E402,F401
from app.infrastructure.db.base import Base  # noqa: E402


async def reset_db():
    logger.info("Resetting invoice schema (drop_all + create_all)...")

    async with engine.begin() as conn:
        logger.info("Dropping invoices and invoice_items...")
        await conn.run_sync(Base.metadata.drop_all)

        logger.info("Creating tables from current models...")
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()
    logger.success("DB reset complete.")


if __name__ == "__main__":
    asyncio.run(reset_db())
