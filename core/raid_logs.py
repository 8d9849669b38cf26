"""
레이드 로그(서핑 세션 기록) 조회 / 작성 로직

조회: 쿼리 파라미터 + 호출자 ID -> 공개 범위 조건 + 추가 필터 -> 페이지 조회 -> 알림 플래그
작성: 예보 스냅샷 upsert (먼저 저장된 값 유지) -> 로그 생성 -> (선택) 알림 생성, 한 트랜잭션
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional

import structlog
from fastapi import HTTPException
from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from core.auth import Caller
from core.scoring import degrees_to_cardinal
from models.alert import Alert
from models.beach import Beach
from models.forecast import Forecast
from models.log_entry import LogEntry
from models.region import Region

log = structlog.get_logger()

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
MIN_RATING = 0
MAX_RATING = 5


@dataclass
class LogQuery:
    beaches: List[str] = field(default_factory=list)
    regions: List[str] = field(default_factory=list)
    countries: List[str] = field(default_factory=list)
    min_rating: int = MIN_RATING
    max_rating: int = MAX_RATING
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    private_only: bool = False
    user_id: Optional[str] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _public():
    return and_(LogEntry.is_private.is_(False), LogEntry.is_anonymous.is_(False))


def visibility_clause(caller_id: Optional[str], target_user_id: Optional[str] = None, private_only: bool = False):
    """
    호출자가 볼 수 있는 로그 조건

    - 다른 사용자 지정: 그 사용자의 공개 + 비익명 로그
    - 본인 지정: 본인 로그 전체 (비공개, 익명 포함)
    - 지정 없음 + 로그인: 공개 + 비익명 로그 또는 본인 로그
    - 지정 없음 + 비로그인: 공개 + 비익명 로그
    - 비공개만 요청 + 로그인: 본인의 비공개 로그 (다른 사용자 지정 시에는 적용하지 않음)
    """
    if caller_id and private_only and target_user_id in (None, caller_id):
        return and_(LogEntry.is_private.is_(True), LogEntry.user_id == caller_id)

    if target_user_id:
        if caller_id == target_user_id:
            return LogEntry.user_id == target_user_id
        return and_(LogEntry.user_id == target_user_id, _public())

    if caller_id:
        return or_(_public(), LogEntry.user_id == caller_id)

    return _public()


def build_log_filters(query: LogQuery, caller_id: Optional[str]) -> list:
    """공개 범위 조건과 추가 필터 (모두 AND)"""
    clauses = [visibility_clause(caller_id, query.user_id, query.private_only)]

    if query.beaches:
        clauses.append(LogEntry.beach.has(Beach.name.in_(query.beaches)))
    if query.regions:
        clauses.append(LogEntry.region_id.in_(query.regions))
    if query.countries:
        clauses.append(LogEntry.region.has(Region.country.in_(query.countries)))
    if query.min_rating > MIN_RATING:
        clauses.append(LogEntry.surfer_rating >= query.min_rating)
    if query.max_rating < MAX_RATING:
        clauses.append(LogEntry.surfer_rating <= query.max_rating)
    if query.start_date:
        clauses.append(LogEntry.date >= query.start_date)
    if query.end_date:
        # 종료일 당일 포함
        clauses.append(LogEntry.date < query.end_date + timedelta(days=1))

    return clauses


def fetch_raid_logs(db: Session, query: LogQuery, caller_id: Optional[str]) -> List[LogEntry]:
    """조건에 맞는 로그를 날짜 내림차순으로 한 페이지 조회합니다."""
    entries = (
        db.query(LogEntry)
        .options(
            selectinload(LogEntry.region),
            selectinload(LogEntry.beach).selectinload(Beach.region),
            selectinload(LogEntry.forecast),
            selectinload(LogEntry.user),
            selectinload(LogEntry.alerts),
        )
        .filter(*build_log_filters(query, caller_id))
        .order_by(LogEntry.date.desc(), LogEntry.created_at.desc(), LogEntry.id)
        .offset(query.offset)
        .limit(query.limit)
        .all()
    )
    log.info("raid_logs_fetched", count=len(entries), page=query.page, caller=caller_id)
    return entries


def annotate_alerts(entry: LogEntry, caller_id: Optional[str]) -> dict:
    """hasAlert / alertId (생성 순 첫 알림) / isMyAlert"""
    alerts = entry.alerts
    return {
        "has_alert": len(alerts) > 0,
        "alert_id": alerts[0].id if alerts else None,
        "is_my_alert": caller_id is not None and any(a.user_id == caller_id for a in alerts),
    }


def get_forecast(db: Session, region_id: str, day: date, for_update: bool = False) -> Optional[Forecast]:
    """for_update=True 이면 잠금 읽기로 다른 트랜잭션이 커밋한 최신 행을 봅니다."""
    query = (
        db.query(Forecast)
        .filter(Forecast.region_id == region_id, Forecast.date == day)
        .order_by(Forecast.created_at.desc())
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def upsert_forecast(db: Session, day: date, region_id: str, forecast) -> Forecast:
    """
    (date, region_id) 예보 스냅샷을 반환합니다. 없을 때만 생성하고, 이미 있으면 수정하지 않습니다.

    동시 생성으로 유니크 제약에 걸리면 savepoint만 롤백하고 먼저 저장된 행을 다시 읽습니다.
    """
    existing = get_forecast(db, region_id, day)
    if existing is not None:
        return existing

    swell = forecast.swell
    snapshot = Forecast(
        date=day,
        region_id=region_id,
        wind_speed=forecast.wind.speed,
        wind_direction=forecast.wind.direction,
        swell_height=swell.height,
        swell_period=swell.period,
        swell_direction=swell.direction,
        swell_cardinal_direction=swell.cardinal_direction or degrees_to_cardinal(swell.direction),
    )
    try:
        with db.begin_nested():
            db.add(snapshot)
    except IntegrityError:
        log.info("forecast_upsert_conflict", region_id=region_id, date=str(day))
        winner = get_forecast(db, region_id, day, for_update=True)
        if winner is None:
            raise
        return winner

    log.info("forecast_created", forecast_id=snapshot.id, region_id=region_id, date=str(day))
    return snapshot


def _build_alert(config, caller: Caller, region_id: str, forecast: Forecast, entry: LogEntry) -> Alert:
    return Alert(
        name=config.name,
        user_id=caller.user_id,
        region_id=region_id,
        forecast_id=forecast.id,
        log_entry_id=entry.id,
        forecast_date=forecast.date,
        properties=[p.model_dump(by_alias=True) for p in config.properties],
        notification_method=config.notification_method,
        contact_info=config.contact_info,
        active=config.active,
        alert_type=config.alert_type or "variables",
        star_rating=config.star_rating,
    )


def create_raid_log(db: Session, payload, caller: Caller) -> LogEntry:
    """
    예보 upsert, 로그 생성, 알림 생성을 하나의 트랜잭션으로 처리합니다.
    중간에 실패하면 전부 롤백하고 예외를 그대로 올립니다.

    Raises:
        HTTPException: 해변/지역을 찾을 수 없는 경우 (404), 해변이 해당 지역 소속이 아닌 경우 (400)
        SQLAlchemyError: 저장 실패
    """
    beach = db.query(Beach).filter(Beach.id == payload.beach_id).first()
    if not beach:
        raise HTTPException(status_code=404, detail="Beach not found")
    region = db.query(Region).filter(Region.id == payload.region_id).first()
    if not region:
        raise HTTPException(status_code=404, detail="Region not found")
    if beach.region_id != region.id:
        raise HTTPException(status_code=400, detail="Beach does not belong to region")

    try:
        forecast = upsert_forecast(db, payload.date, region.id, payload.forecast)

        entry = LogEntry(
            date=payload.date,
            surfer_name=payload.surfer_name,
            surfer_email=caller.email,
            surfer_rating=payload.surfer_rating,
            comments=payload.comments,
            is_private=payload.is_private,
            is_anonymous=payload.is_anonymous,
            wave_type=payload.wave_type,
            image_url=payload.image_url,
            video_url=payload.video_url,
            video_platform=payload.video_platform,
            user_id=caller.user_id,
            region_id=region.id,
            beach_id=beach.id,
            forecast_id=forecast.id,
        )
        db.add(entry)
        db.flush()

        if payload.create_alert and payload.alert_config is not None:
            db.add(_build_alert(payload.alert_config, caller, region.id, forecast, entry))
            db.flush()

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(entry)
    log.info("raid_log_created", log_entry_id=entry.id, user_id=caller.user_id,
             forecast_id=forecast.id, alert=bool(payload.create_alert and payload.alert_config))
    return entry
