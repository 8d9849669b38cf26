"""
해변 목록 화면 상태 저장소

해변 목록, 필터, 점수, 정렬, 페이지, 로딩 상태를 보관합니다.
비즈니스 로직은 없고 조회/설정 메서드만 제공합니다.
"""
from typing import Dict, List, Optional, Sequence

from core.beach_filters import BeachSort, FilterCriteria, ScoreMap, ScoredBeach, filter_beaches

LOADING_KINDS = ("forecast", "beaches", "scores")


class BeachViewState:
    def __init__(self, initial_beaches: Sequence = (), initial_filters: Optional[FilterCriteria] = None):
        self._beaches = list(initial_beaches)
        self._filters = initial_filters or FilterCriteria()
        self._forecast_data = None
        self._beach_scores: ScoreMap = {}
        self._today_good_beaches: List[dict] = []
        self._sort = BeachSort()
        self._current_page = 1
        self._is_loading = False
        self._loading_states: Dict[str, bool] = {kind: False for kind in LOADING_KINDS}

    @property
    def beaches(self) -> list:
        return list(self._beaches)

    def set_beaches(self, beaches: Sequence) -> None:
        self._beaches = list(beaches)

    @property
    def filters(self) -> FilterCriteria:
        return self._filters

    def set_filters(self, filters: FilterCriteria) -> None:
        if not isinstance(filters, FilterCriteria):
            raise TypeError("filters must be a FilterCriteria")
        self._filters = filters

    @property
    def forecast_data(self):
        return self._forecast_data

    def set_forecast_data(self, data) -> None:
        self._forecast_data = data

    @property
    def beach_scores(self) -> ScoreMap:
        return self._beach_scores

    def set_beach_scores(self, scores: ScoreMap) -> None:
        self._beach_scores = dict(scores)

    @property
    def today_good_beaches(self) -> List[dict]:
        return self._today_good_beaches

    def set_today_good_beaches(self, beaches: List[dict]) -> None:
        self._today_good_beaches = list(beaches)

    @property
    def sort(self) -> BeachSort:
        return self._sort

    def set_sort(self, sort: BeachSort) -> None:
        self._sort = sort

    @property
    def current_page(self) -> int:
        return self._current_page

    def set_current_page(self, page: int) -> None:
        self._current_page = page

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    def set_is_loading(self, loading: bool) -> None:
        self._is_loading = loading

    @property
    def loading_states(self) -> Dict[str, bool]:
        return self._loading_states

    def set_loading_state(self, kind: str, loading: bool) -> None:
        if kind not in LOADING_KINDS:
            raise ValueError(f"Unknown loading state: {kind}")
        # 이전에 반환한 dict는 건드리지 않고 새 dict로 교체
        self._loading_states = {**self._loading_states, kind: loading}

    def filtered_beaches(self) -> List[ScoredBeach]:
        return filter_beaches(self._beaches, self._filters, self._beach_scores)
