import asyncio
import logging
import sys
from anyio import to_thread
from app.core.config import ACCESS_CODE_SEED
from app.core.database import AsyncSessionLocal
from app.core.logging import configure_logging
from app.core.security import hash_access_code
from app.domain.owners.crud import upsert_owner
from app.domain.owners.models import Owner


logger = logging.getLogger("scripts.seed_owner")


async def seed_owner(db, access_code: str | None) -> Owner | None:
    if not access_code:
        logger.error("ACCESS_CODE_SEED is required - skipping seed...")
        return None

    access_code_hash = await to_thread.run_sync(hash_access_code, access_code)
    owner, created = await upsert_owner(db, access_code_hash)
    await db.flush()
    logger.info("Owner %s with access code from environment", "created" if created else "updated")
    return owner


async def main() -> int:
    async with AsyncSessionLocal() as db:
        owner = await seed_owner(db, ACCESS_CODE_SEED)
        if not owner:
            return 1
        await db.commit()
        logger.info("Owner OK: %s", owner.id)
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main()))
