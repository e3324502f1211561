from __future__ import annotations

import pytest

from division_risk_navigator import list_divisions, search
from division_risk_navigator.data import DIVISION_RECORDS, DivisionRepository, default_repository


def test_list_divisions_preserves_fixture_order() -> None:
    divisions = list_divisions()
    assert len(divisions) == 15
    assert [d.id for d in divisions] == [record["id"] for record in DIVISION_RECORDS]
    assert divisions[0].id == "dublin-central"
    assert divisions[-1].id == "tipperary"


def test_list_divisions_returns_a_fresh_list() -> None:
    first = list_divisions()
    first.clear()
    assert len(list_divisions()) == 15


def test_fixture_ids_are_unique() -> None:
    ids = [d.id for d in list_divisions()]
    assert len(ids) == len(set(ids))


def test_fixture_values_are_in_range() -> None:
    for division in list_divisions():
        for assessment in (division.current_risk, division.future_risk):
            assert 0 <= assessment.overall <= 100
            assert all(0 <= value <= 100 for value in assessment.factors.as_dict().values())


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_search_returns_everything(query) -> None:
    assert search(query) == list_divisions()


def test_search_matches_name_or_county_case_insensitively() -> None:
    assert [d.id for d in search("dublin")] == ["dublin-central", "dublin-north"]
    assert [d.id for d in search("DUBLIN")] == ["dublin-central", "dublin-north"]
    assert [d.id for d in search("cork")] == ["cork-south-central"]
    assert [d.id for d in search("laois")] == ["laois-offaly"]
    assert [d.id for d in search("offaly")] == ["laois-offaly"]
    # Sligo-Leitrim is filed under county Sligo.
    assert [d.id for d in search("sligo")] == ["sligo-leitrim"]


def test_search_substring_and_no_match() -> None:
    assert [d.id for d in search("ford")] == ["waterford", "wexford"]
    assert search("atlantis") == []


def test_get_by_id() -> None:
    repository = default_repository()
    assert repository.get("kerry").name == "Kerry"
    assert repository.get("missing") is None


def test_duplicate_ids_are_rejected() -> None:
    division = default_repository().get("kerry")
    with pytest.raises(ValueError):
        DivisionRepository([division, division])


def test_custom_repository_search() -> None:
    repository = DivisionRepository.from_payloads(
        [
            {
                "id": "a",
                "name": "North Quay",
                "county": "Dublin",
                "coordinates": [53.0, -6.0],
                "current_risk": {"overall": 20, "factors": _factors()},
                "future_risk": {"overall": 30, "factors": _factors()},
            },
            {
                "id": "b",
                "name": "Harbour",
                "county": "Cork",
                "coordinates": [51.9, -8.4],
                "current_risk": {"overall": 20, "factors": _factors()},
                "future_risk": {"overall": 30, "factors": _factors()},
            },
        ]
    )
    assert len(repository) == 2
    assert [d.id for d in repository.search("north")] == ["a"]
    assert [d.id for d in repository.search("CORK")] == ["b"]


def _factors() -> dict[str, int]:
    return {"dependency_ratio": 20, "hospital_stress": 20, "isolation_score": 20, "walkability": 80}
