"""
해변 필터링 / 점수 결합 로직

beaches + FilterCriteria + ScoreMap -> 점수가 붙은 해변 목록.
필터는 아래 순서로 적용되며 모두 AND 조건입니다.

1. 검색어 (해변명 / 지역명 / 국가명, 대소문자 무시 부분 일치)
2. 지역명 일치
3. 파도 타입
4. 난이도
5. 치안 수준
6. 상어 공격 여부 ("true" / "false")
7. 최소 점수
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple


@dataclass(frozen=True)
class LocationFilter:
    region: str = ""
    region_id: str = ""
    country: str = ""
    continent: str = ""


@dataclass(frozen=True)
class FilterCriteria:
    """필터 조건 값 객체. 부분 수정하지 않고 항상 통째로 교체합니다."""
    search_query: str = ""
    location: LocationFilter = field(default_factory=LocationFilter)
    wave_type: Tuple[str, ...] = ()
    difficulty: Tuple[str, ...] = ()
    crime_level: Tuple[str, ...] = ()
    shark_attack: Tuple[str, ...] = ()
    min_points: float = 0


@dataclass(frozen=True)
class BeachScore:
    score: float
    region: str


ScoreMap = Dict[str, BeachScore]


@dataclass(frozen=True)
class ScoredBeach:
    beach: Any
    score: float


@dataclass(frozen=True)
class BeachSort:
    field: str = "score"  # "score" | "name"
    direction: str = "desc"  # "asc" | "desc"


def resolve_score(beach_id: str, scores: ScoreMap) -> float:
    """점수가 없는 해변은 0점"""
    entry = scores.get(beach_id)
    return entry.score if entry is not None else 0.0


def _matches_search(beach, query: str) -> bool:
    needle = query.lower()
    region = beach.region
    fields = [beach.name]
    if region is not None:
        fields.append(region.name)
        fields.append(region.country)
    return any(value and needle in value.lower() for value in fields)


def _in_set(value, allowed: Sequence[str]) -> bool:
    return not allowed or value in allowed


def _passes(item: ScoredBeach, criteria: FilterCriteria) -> bool:
    beach = item.beach

    if criteria.search_query and not _matches_search(beach, criteria.search_query):
        return False

    if criteria.location.region:
        region_name = beach.region.name if beach.region is not None else None
        if region_name != criteria.location.region:
            return False

    if not _in_set(beach.wave_type, criteria.wave_type):
        return False
    if not _in_set(beach.difficulty, criteria.difficulty):
        return False
    if not _in_set(beach.crime_level, criteria.crime_level):
        return False

    shark = "true" if beach.has_shark_attack else "false"
    if not _in_set(shark, criteria.shark_attack):
        return False

    if criteria.min_points > 0 and item.score < criteria.min_points:
        return False

    return True


def filter_beaches(
    beaches: Iterable,
    criteria: FilterCriteria,
    scores: ScoreMap,
) -> List[ScoredBeach]:
    """점수를 붙이고 필터를 통과한 해변만 입력 순서대로 반환합니다."""
    scored = [ScoredBeach(beach=b, score=resolve_score(b.id, scores)) for b in beaches]
    return [item for item in scored if _passes(item, criteria)]


def sort_beaches(items: List[ScoredBeach], sort: BeachSort) -> List[ScoredBeach]:
    reverse = sort.direction == "desc"
    if sort.field == "name":
        return sorted(items, key=lambda item: item.beach.name.lower(), reverse=reverse)
    if sort.field == "score":
        return sorted(items, key=lambda item: item.score, reverse=reverse)
    raise ValueError(f"Unknown sort field: {sort.field}")


def paginate(items: List, page: int, limit: int) -> List:
    start = (page - 1) * limit
    return items[start:start + limit]
