"""
해변 점수 계산 모듈

지역 예보 스냅샷과 해변의 선호 조건을 비교해 0 ~ 5점을 계산합니다.

- 스웰 크기: 선호 범위 안 +2, 범위에서 50% 이내 +1
- 스웰 주기: 이상 주기 이상 +1, 3초 이내 부족 +0.5
- 스웰 방향: 선호 방향과 22.5도 이내 +1, 45도 이내 +0.5
- 바람: 5노트 미만(글래시) 또는 선호 방향 45도 이내 +1
"""
import math
from typing import Dict, Iterable, List, Optional

import numpy as np

from core.beach_filters import BeachScore, ScoreMap

CARDINALS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]

CARDINAL_DEGREES = {
    "N": 0.0, "NNE": 22.5, "NE": 45.0, "ENE": 67.5,
    "E": 90.0, "ESE": 112.5, "SE": 135.0, "SSE": 157.5,
    "S": 180.0, "SSW": 202.5, "SW": 225.0, "WSW": 247.5,
    "W": 270.0, "WNW": 292.5, "NW": 315.0, "NNW": 337.5,
}

MAX_SCORE = 5.0
GOOD_BEACH_SCORE = 4.0
GLASSY_WIND_KTS = 5.0


def degrees_to_cardinal(degrees: Optional[float]) -> str:
    """각도를 8방위로 변환 (0 -> "N", 45 -> "NE", ...)"""
    if degrees is None or not math.isfinite(degrees):
        return "N/A"
    index = int(math.floor((degrees % 360) / 45 + 0.5)) % 8
    return CARDINALS[index]


def parse_directions(value: Optional[str]) -> List[float]:
    """"NE,E" -> [45.0, 90.0] (모르는 방위는 무시)"""
    if not value:
        return []
    labels = [label.strip().upper() for label in value.split(",")]
    return [CARDINAL_DEGREES[label] for label in labels if label in CARDINAL_DEGREES]


def angular_distance(degrees: float, targets: Iterable[float]) -> float:
    """degrees와 targets 중 가장 가까운 방향 사이의 각도 (0 ~ 180)"""
    targets = np.asarray(list(targets), dtype=float)
    if targets.size == 0:
        return 180.0
    diff = np.abs((degrees - targets + 180.0) % 360.0 - 180.0)
    return float(diff.min())


def _swell_size_points(beach, height: float) -> float:
    low, high = beach.swell_size_min, beach.swell_size_max
    if low is None or high is None:
        return 0.0
    if low <= height <= high:
        return 2.0
    if low * 0.5 <= height <= high * 1.5:
        return 1.0
    return 0.0


def _swell_period_points(beach, period: float) -> float:
    ideal = beach.ideal_swell_period_min
    if ideal is None:
        return 0.0
    if period >= ideal:
        return 1.0
    if period >= ideal - 3:
        return 0.5
    return 0.0


def _swell_direction_points(beach, direction: float) -> float:
    preferred = parse_directions(beach.optimal_swell_directions)
    if not preferred:
        return 0.0
    distance = angular_distance(direction, preferred)
    if distance <= 22.5:
        return 1.0
    if distance <= 45.0:
        return 0.5
    return 0.0


def _wind_points(beach, speed: float, direction: float) -> float:
    if speed < GLASSY_WIND_KTS:
        return 1.0
    preferred = parse_directions(beach.optimal_wind_directions)
    if preferred and angular_distance(direction, preferred) <= 45.0:
        return 1.0
    return 0.0


def score_beach(beach, forecast) -> float:
    """예보 스냅샷 기준 해변 점수 (0 ~ 5, 소수점 한 자리)"""
    score = (
        _swell_size_points(beach, forecast.swell_height)
        + _swell_period_points(beach, forecast.swell_period)
        + _swell_direction_points(beach, forecast.swell_direction)
        + _wind_points(beach, forecast.wind_speed, forecast.wind_direction)
    )
    return round(min(score, MAX_SCORE), 1)


def build_score_map(beaches: Iterable, forecasts: Iterable) -> ScoreMap:
    """
    지역 예보가 있는 해변만 점수를 계산합니다.
    예보가 없는 해변은 결과에 포함되지 않습니다 (조회 시 0점 처리).
    """
    by_region: Dict[str, object] = {f.region_id: f for f in forecasts}
    scores: ScoreMap = {}
    for beach in beaches:
        forecast = by_region.get(beach.region_id)
        if forecast is None:
            continue
        region_name = beach.region.name if beach.region is not None else ""
        scores[beach.id] = BeachScore(score=score_beach(beach, forecast), region=region_name)
    return scores


def good_beaches(scores: ScoreMap, threshold: float = GOOD_BEACH_SCORE) -> List[dict]:
    """오늘 점수가 좋은 해변 목록 (점수 내림차순)"""
    picked = [
        {"beach_id": beach_id, "region": entry.region, "score": entry.score}
        for beach_id, entry in scores.items()
        if entry.score >= threshold
    ]
    return sorted(picked, key=lambda item: item["score"], reverse=True)
