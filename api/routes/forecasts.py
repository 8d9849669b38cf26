from datetime import date

from fastapi import APIRouter, HTTPException, Query, Depends
from sqlalchemy.orm import Session

from api.schemas import ForecastOut
from core.database import get_db
from core.raid_logs import get_forecast

router = APIRouter(
    prefix="/v1/forecasts",
    tags=["forecasts"]
)


@router.get("", response_model=ForecastOut)
async def get_region_forecast(
    region_id: str = Query(..., alias="regionId"),
    target_date: date = Query(..., alias="date", description="YYYY-MM-DD"),
    db: Session = Depends(get_db)
):
    """지역의 해당 날짜 예보 스냅샷을 조회합니다."""
    forecast = get_forecast(db, region_id, target_date)
    if not forecast:
        raise HTTPException(status_code=404, detail="Forecast not found")
    return forecast
