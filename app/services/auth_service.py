import logging
from sqlalchemy.ext.asyncio import AsyncSession
from anyio import to_thread
from app.core.config import ACCESS_TOKEN_EXPIRE_MINUTES
from app.core.security import verify_access_code, create_access_token
from app.domain.auth.schemas import SignInResponseDTO
from app.domain.exceptions import Unauthorized, ServerConfigurationError
from app.domain.owners.crud import get_owner


logger = logging.getLogger("app.auth")


async def sign_in(db: AsyncSession, access_code: str) -> SignInResponseDTO:
    owner = await get_owner(db)
    if not owner:
        logger.error("Sign-in attempted but no owner is provisioned")
        raise ServerConfigurationError("Owner not initialized")

    ok = await to_thread.run_sync(verify_access_code, access_code, owner.access_code_hash)
    if not ok:
        logger.warning("Sign-in rejected")
        raise Unauthorized("Invalid access code", ctx={"reason": "bad_credentials"})

    logger.info("Owner %s signed in", owner.id)
    return SignInResponseDTO(
        token=create_access_token(str(owner.id)),
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60
    )
