import asyncio
import logging
import sys
from app.core.config import INVOICE_SEQUENCE_KEY
from app.core.database import AsyncSessionLocal
from app.core.logging import configure_logging
from app.domain.invoices import crud


logger = logging.getLogger("scripts.clean_database")


async def clean_database(db) -> tuple[int, int]:
    deleted = await crud.delete_invoices(db)
    logger.info("Deleted %d invoices", deleted)
    counters_reset = await crud.reset_counter(db, INVOICE_SEQUENCE_KEY)
    logger.info("Reset invoice number counter")
    return deleted, counters_reset


async def main() -> int:
    async with AsyncSessionLocal() as db:
        try:
            await clean_database(db)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.exception("Error cleaning database")
            return 1
    logger.info("Database cleaned successfully")
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main()))
