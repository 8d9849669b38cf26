from datetime import date, datetime, timezone
from typing import List, Optional

import structlog
from fastapi import APIRouter, HTTPException, Query, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from api.schemas import CamelModel, BeachOut
from core.beach_filters import BeachSort, FilterCriteria, LocationFilter, paginate, sort_beaches
from core.beach_state import BeachViewState
from core.database import get_db
from core.scoring import build_score_map, good_beaches
from models.beach import Beach
from models.forecast import Forecast

log = structlog.get_logger()

router = APIRouter(
    prefix="/v1/beaches",
    tags=["beaches"]
)


class ScoredBeachOut(BeachOut):
    score: float = 0


class GoodBeach(CamelModel):
    beach_id: str
    region: str
    score: float


class BeachListResponse(CamelModel):
    total: int
    page: int
    items: List[ScoredBeachOut]
    today_good_beaches: List[GoodBeach]


def _split(value: Optional[str]) -> tuple:
    if not value:
        return ()
    return tuple(item for item in value.split(",") if item)


def load_beach_state(db: Session, target_date: date, criteria: FilterCriteria) -> BeachViewState:
    """해변, 예보 점수, 필터를 채운 화면 상태를 만듭니다."""
    state = BeachViewState()

    state.set_loading_state("beaches", True)
    beaches = db.query(Beach).options(selectinload(Beach.region)).order_by(Beach.name).all()
    state.set_beaches(beaches)
    state.set_loading_state("beaches", False)

    state.set_loading_state("forecast", True)
    forecasts = db.query(Forecast).filter(Forecast.date == target_date).all()
    state.set_forecast_data(forecasts)
    state.set_loading_state("forecast", False)

    state.set_loading_state("scores", True)
    scores = build_score_map(beaches, forecasts)
    state.set_beach_scores(scores)
    state.set_today_good_beaches(good_beaches(scores))
    state.set_loading_state("scores", False)

    state.set_filters(criteria)
    return state


@router.get("", response_model=BeachListResponse)
async def list_beaches(
    search: str = Query("", description="해변 / 지역 / 국가 검색어"),
    region: str = Query("", description="지역 이름"),
    wave_type: Optional[str] = Query(None, alias="waveType"),
    difficulty: Optional[str] = Query(None),
    crime_level: Optional[str] = Query(None, alias="crimeLevel"),
    shark_attack: Optional[str] = Query(None, alias="sharkAttack", description="true,false"),
    min_points: float = Query(0, alias="minPoints", ge=0),
    target_date: Optional[date] = Query(None, alias="date", description="점수 기준 날짜 (기본: 오늘)"),
    sort: str = Query("score", pattern="^(score|name)$"),
    direction: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """
    해변 목록을 점수와 함께 조회합니다.

    지정한 날짜의 지역 예보로 점수를 계산한 뒤 필터 / 정렬 / 페이지를 적용합니다.
    """
    criteria = FilterCriteria(
        search_query=search,
        location=LocationFilter(region=region),
        wave_type=_split(wave_type),
        difficulty=_split(difficulty),
        crime_level=_split(crime_level),
        shark_attack=_split(shark_attack),
        min_points=min_points,
    )
    target_date = target_date or datetime.now(timezone.utc).date()

    try:
        state = load_beach_state(db, target_date, criteria)
    except SQLAlchemyError:
        log.exception("beaches_fetch_failed")
        raise HTTPException(status_code=500, detail="Failed to fetch beaches")

    state.set_sort(BeachSort(field=sort, direction=direction))
    state.set_current_page(page)

    filtered = sort_beaches(state.filtered_beaches(), state.sort)
    items = [
        ScoredBeachOut.model_validate(item.beach).model_copy(update={"score": item.score})
        for item in paginate(filtered, state.current_page, limit)
    ]
    log.info("beaches_listed", total=len(filtered), date=str(target_date))

    return BeachListResponse(
        total=len(filtered),
        page=state.current_page,
        items=items,
        today_good_beaches=[GoodBeach(**good) for good in state.today_good_beaches],
    )


@router.get("/{beach_id}", response_model=BeachOut)
async def get_beach(beach_id: str, db: Session = Depends(get_db)):
    """해변 상세 조회"""
    beach = db.query(Beach).options(selectinload(Beach.region)).filter(Beach.id == beach_id).first()
    if not beach:
        raise HTTPException(status_code=404, detail="Beach not found")
    return beach
