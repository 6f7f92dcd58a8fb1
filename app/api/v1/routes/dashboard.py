from typing import Annotated
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dates import DateRange
from app.core.dependencies.auth import get_current_owner_id
from app.core.dependencies.dates import date_range_query
from app.domain.reporting.schemas import SummaryDTO, DailyReportDTO
from app.services import reporting_service


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])
db_dependency = Annotated[AsyncSession, Depends(get_db)]
owner_dependency = Annotated[UUID, Depends(get_current_owner_id)]


@router.get("/summary", response_model=SummaryDTO)
async def summary(
        db: db_dependency,
        owner_id: owner_dependency,
        date_range: Annotated[DateRange, Depends(date_range_query)]
):
    return await reporting_service.summary(db, owner_id, None if date_range.is_open else date_range)


@router.get("/daily", response_model=DailyReportDTO)
async def daily(db: db_dependency, owner_id: owner_dependency, date: Annotated[str | None, Query()] = None):
    return await reporting_service.daily(db, owner_id, date)
