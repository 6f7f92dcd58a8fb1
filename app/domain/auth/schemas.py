from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Literal
from app.core.text_utils import strip_text


class SignInRequestDTO(BaseModel):
    model_config = ConfigDict(extra='forbid', alias_generator=to_camel, populate_by_name=True)

    access_code: str = Field(min_length=1, max_length=256)

    _strip_access_code = field_validator("access_code", mode="before")(strip_text)


class SignInResponseDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int = Field(description='Expiration time in seconds')


class TokenPayload(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sub: str
    iat: int
    nbf: int
    exp: int
    jti: str | None = None
    typ: Literal["access"] | None = None
    iss: str | None = None
    aud: str | list[str] | None = None
