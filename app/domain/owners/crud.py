from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from .models import Owner


async def get_owner(db: AsyncSession) -> Owner | None:
    stmt = select(Owner).where(Owner.slot == 1)
    result = await db.execute(stmt)
    return result.scalars().first()


async def upsert_owner(db: AsyncSession, access_code_hash: str) -> tuple[Owner, bool]:
    owner = await get_owner(db)
    if owner:
        owner.access_code_hash = access_code_hash
        return owner, False
    owner = Owner(access_code_hash=access_code_hash)
    db.add(owner)
    return owner, True
