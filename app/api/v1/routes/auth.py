from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.domain.auth.schemas import SignInRequestDTO, SignInResponseDTO
from app.services.auth_service import sign_in
from typing import Annotated


router = APIRouter(prefix='/api/auth', tags=['auth'])
db_dependency = Annotated[AsyncSession, Depends(get_db)]


@router.post("/sign-in", response_model=SignInResponseDTO)
async def sign_in_owner(schema: SignInRequestDTO, db: db_dependency):
    return await sign_in(db, schema.access_code)
