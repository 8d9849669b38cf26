"""Tests for the beach view-state store."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from core.beach_filters import BeachScore, BeachSort, FilterCriteria
from core.beach_state import BeachViewState


def _beach(id, name):
    return SimpleNamespace(id=id, name=name, region=None, wave_type="Beach Break",
                           difficulty="Beginner", crime_level="Low", has_shark_attack=False)


def test_defaults():
    state = BeachViewState()
    assert state.beaches == []
    assert state.filters == FilterCriteria()
    assert state.beach_scores == {}
    assert state.sort == BeachSort(field="score", direction="desc")
    assert state.current_page == 1
    assert state.is_loading is False
    assert state.loading_states == {"forecast": False, "beaches": False, "scores": False}


def test_initial_values_are_used():
    criteria = FilterCriteria(search_query="bay")
    beaches = [_beach("b1", "Bay")]
    state = BeachViewState(initial_beaches=beaches, initial_filters=criteria)
    assert state.filters is criteria
    assert state.beaches == beaches


def test_set_filters_replaces_whole_object():
    state = BeachViewState()
    first = FilterCriteria(search_query="a", min_points=3)
    second = FilterCriteria(difficulty=("Beginner",))

    state.set_filters(first)
    state.set_filters(second)

    assert state.filters is second
    assert state.filters.min_points == 0
    assert state.filters.search_query == ""


def test_set_filters_rejects_partial_updates():
    state = BeachViewState()
    with pytest.raises(TypeError):
        state.set_filters({"search_query": "x"})


def test_set_loading_state_swaps_mapping():
    state = BeachViewState()
    before = state.loading_states

    state.set_loading_state("scores", True)

    assert state.loading_states == {"forecast": False, "beaches": False, "scores": True}
    assert before["scores"] is False


def test_set_loading_state_rejects_unknown_kind():
    with pytest.raises(ValueError):
        BeachViewState().set_loading_state("sponsors", True)


def test_simple_setters():
    state = BeachViewState()
    state.set_current_page(3)
    state.set_sort(BeachSort(field="name", direction="asc"))
    state.set_is_loading(True)
    state.set_forecast_data({"region": "r1"})
    state.set_today_good_beaches([{"beach_id": "b1", "region": "r", "score": 4.5}])

    assert state.current_page == 3
    assert state.sort.field == "name"
    assert state.is_loading is True
    assert state.forecast_data == {"region": "r1"}
    assert state.today_good_beaches[0]["beach_id"] == "b1"


def test_filtered_beaches_uses_current_state():
    state = BeachViewState(initial_beaches=[_beach("b1", "Alpha"), _beach("b2", "Beta")])
    state.set_beach_scores({"b2": BeachScore(score=4.0, region="r")})
    state.set_filters(FilterCriteria(min_points=1))

    result = state.filtered_beaches()

    assert [item.beach.id for item in result] == ["b2"]
    assert result[0].score == 4.0


def test_beaches_accessor_returns_copy():
    state = BeachViewState(initial_beaches=[_beach("b1", "Alpha")])

    state.beaches.append(_beach("b2", "Beta"))
    state.beaches.clear()

    assert [b.id for b in state.beaches] == ["b1"]
