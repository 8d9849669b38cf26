from datetime import date as date_type
from typing import List, Optional

import structlog
from fastapi import APIRouter, HTTPException, Query, Depends
from pydantic import Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.schemas import CamelModel, RegionOut, BeachOut, ForecastOut
from core.auth import Caller, get_caller, require_caller
from core.database import get_db
from core import raid_logs
from core.raid_logs import LogQuery

log = structlog.get_logger()

router = APIRouter(
    prefix="/v1/raid-logs",
    tags=["raid-logs"]
)


class WindInput(CamelModel):
    speed: float = Field(..., ge=0)
    direction: float


class SwellInput(CamelModel):
    height: float = Field(..., ge=0)
    period: float = Field(..., ge=0)
    direction: float
    cardinal_direction: Optional[str] = None


class ForecastInput(CamelModel):
    wind: WindInput
    swell: SwellInput


class AlertProperty(CamelModel):
    property: str
    optimal_value: float
    range: float


class AlertConfig(CamelModel):
    name: str
    properties: List[AlertProperty] = []
    notification_method: str
    contact_info: str
    active: bool = True
    alert_type: Optional[str] = "variables"
    star_rating: Optional[int] = Field(default=None, ge=0, le=5)


class RaidLogCreate(CamelModel):
    date: date_type
    region_id: str
    beach_id: str
    surfer_name: str
    surfer_rating: int = Field(..., ge=0, le=5)
    comments: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    video_platform: Optional[str] = None
    is_private: bool = False
    is_anonymous: bool = False
    wave_type: Optional[str] = None
    forecast: ForecastInput
    create_alert: bool = False
    alert_config: Optional[AlertConfig] = None


class UserSummary(CamelModel):
    id: str
    name: Optional[str] = None
    nationality: Optional[str] = None


class AlertRef(CamelModel):
    id: str
    user_id: str


class LogEntryOut(CamelModel):
    id: str
    date: date_type
    surfer_name: Optional[str] = None
    surfer_email: Optional[str] = None
    surfer_rating: int
    comments: Optional[str] = None
    is_private: bool
    is_anonymous: bool
    wave_type: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    video_platform: Optional[str] = None
    user_id: str
    region: Optional[RegionOut] = None
    beach: Optional[BeachOut] = None
    forecast: Optional[ForecastOut] = None


class RaidLogOut(LogEntryOut):
    user: Optional[UserSummary] = None
    alerts: List[AlertRef] = []
    has_alert: bool = False
    alert_id: Optional[str] = None
    is_my_alert: bool = False


def _split(value: Optional[str]) -> List[str]:
    """"a,b,,c" -> ["a", "b", "c"]"""
    if not value:
        return []
    return [item for item in value.split(",") if item]


@router.get("", response_model=List[RaidLogOut])
async def get_raid_logs(
    beaches: Optional[str] = Query(None, description="해변 이름 (쉼표 구분)"),
    regions: Optional[str] = Query(None, description="지역 ID (쉼표 구분)"),
    countries: Optional[str] = Query(None, description="국가 (쉼표 구분)"),
    min_rating: int = Query(0, alias="minRating", ge=0, le=5),
    max_rating: int = Query(5, alias="maxRating", ge=0, le=5),
    start_date: Optional[date_type] = Query(None, alias="startDate"),
    end_date: Optional[date_type] = Query(None, alias="endDate"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    is_private: bool = Query(False, alias="isPrivate"),
    user_id: Optional[str] = Query(None, alias="userId"),
    caller: Optional[Caller] = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """
    레이드 로그 목록을 조회합니다.

    - 비로그인: 공개 + 비익명 로그만
    - 로그인: 공개 + 비익명 로그와 본인 로그
    - **userId**: 특정 사용자 로그 (본인이면 비공개/익명 포함)
    - **isPrivate**: 로그인 사용자의 비공개 로그만
    """
    query = LogQuery(
        beaches=_split(beaches),
        regions=_split(regions),
        countries=_split(countries),
        min_rating=min_rating,
        max_rating=max_rating,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
        private_only=is_private,
        user_id=user_id or None,
    )
    caller_id = caller.user_id if caller else None

    try:
        entries = raid_logs.fetch_raid_logs(db, query, caller_id)
        return [
            RaidLogOut.model_validate(entry).model_copy(
                update=raid_logs.annotate_alerts(entry, caller_id)
            )
            for entry in entries
        ]
    except SQLAlchemyError:
        log.exception("raid_logs_fetch_failed")
        raise HTTPException(status_code=500, detail="Failed to fetch logs")


@router.post("", response_model=LogEntryOut)
async def create_raid_log(
    request: RaidLogCreate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db)
):
    """
    레이드 로그를 작성합니다. (Authorization 헤더에 Bearer 토큰 필요)

    같은 날짜/지역의 예보가 이미 있으면 그대로 재사용합니다.
    **createAlert**와 **alertConfig**가 있으면 알림도 함께 생성합니다.
    """
    try:
        entry = raid_logs.create_raid_log(db, request, caller)
        return LogEntryOut.model_validate(entry)
    except SQLAlchemyError:
        log.exception("raid_log_create_failed", user_id=caller.user_id)
        raise HTTPException(status_code=500, detail="Failed to create log entry")
