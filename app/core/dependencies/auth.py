from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from typing import Annotated
from uuid import UUID
from jose import JWTError, jwt
from pydantic import ValidationError
from app.core.security import ALGORITHM
from app.core.config import SECRET_KEY, JWT_ISSUER, JWT_AUDIENCE
from app.domain.auth.schemas import TokenPayload
from app.domain.exceptions import Unauthorized


oauth2_bearer = OAuth2PasswordBearer(tokenUrl="/api/auth/sign-in", auto_error=False)


async def get_token_payload(token: Annotated[str | None, Depends(oauth2_bearer)]) -> TokenPayload:
    if not token:
        raise Unauthorized("Not authenticated", ctx={"reason": "missing_token"})
    try:
        raw_payload = jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            issuer=JWT_ISSUER,
            audience=JWT_AUDIENCE,
            options={"verify_aud": True, "leeway": 5}
        )
        if raw_payload.get("typ") != "access":
            raise Unauthorized("Invalid token type", ctx={"reason": "invalid_type"})
        return TokenPayload.model_validate(raw_payload)
    except (JWTError, ValidationError):
        raise Unauthorized("Invalid authentication credentials", ctx={"reason": "invalid_token"})


async def get_current_owner_id(payload: Annotated[TokenPayload, Depends(get_token_payload)]) -> UUID:
    try:
        owner_id = UUID(payload.sub)
    except ValueError:
        raise Unauthorized("Invalid authentication credentials", ctx={"reason": "invalid_subject"})
    return owner_id
