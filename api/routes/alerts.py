from datetime import date, datetime
from typing import Any, List, Optional

import structlog
from fastapi import APIRouter, HTTPException, Depends
from pydantic import Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.schemas import CamelModel
from core.auth import Caller, require_caller
from core.database import get_db
from models.alert import Alert

log = structlog.get_logger()

router = APIRouter(
    prefix="/v1/alerts",
    tags=["alerts"]
)

# PATCH 에서 null 로 비울 수 있는 필드
NULLABLE_FIELDS = ("star_rating",)


class AlertOut(CamelModel):
    id: str
    name: str
    region_id: str
    forecast_id: Optional[str] = None
    log_entry_id: Optional[str] = None
    forecast_date: Optional[date] = None
    properties: List[Any] = []
    notification_method: str
    contact_info: str
    active: bool
    alert_type: str
    star_rating: Optional[int] = None
    created_at: Optional[datetime] = None


class AlertUpdate(CamelModel):
    active: Optional[bool] = None
    star_rating: Optional[int] = Field(default=None, ge=0, le=5)
    notification_method: Optional[str] = None
    contact_info: Optional[str] = None


@router.get("", response_model=List[AlertOut])
async def list_my_alerts(
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db)
):
    """로그인 사용자의 알림 목록"""
    return (
        db.query(Alert)
        .filter(Alert.user_id == caller.user_id)
        .order_by(Alert.created_at.desc(), Alert.id)
        .all()
    )


@router.patch("/{alert_id}", response_model=AlertOut)
async def update_alert(
    alert_id: str,
    request: AlertUpdate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db)
):
    """
    알림 설정 변경 (본인 알림만)

    - **active**: 알림 사용 여부
    - **starRating**: 별점 기준 (0 ~ 5)
    """
    alert = (
        db.query(Alert)
        .filter(Alert.id == alert_id, Alert.user_id == caller.user_id)
        .first()
    )
    if not alert:
        raise HTTPException(status_code=404, detail="Alert not found")

    for key, value in request.model_dump(exclude_unset=True).items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(alert, key, value)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        log.exception("alert_update_failed", alert_id=alert_id)
        raise HTTPException(status_code=500, detail="Failed to update alert")

    db.refresh(alert)
    return alert
