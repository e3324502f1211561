from __future__ import annotations

import pytest

from division_risk_navigator.core import (
    DEFAULT_PROJECTION_YEAR,
    PROJECTION_YEARS,
    compute_overall_score,
    project_future_risk,
    resolve_view,
    resolve_year,
)
from division_risk_navigator.data import default_repository


@pytest.fixture
def dublin_central():
    return default_repository().get("dublin-central")


def test_projection_years() -> None:
    assert PROJECTION_YEARS == ("2025", "2030", "2035", "2040", "2050")
    assert DEFAULT_PROJECTION_YEAR == "2030"


def test_projects_each_factor_with_its_sensitivity(dublin_central) -> None:
    projected = project_future_risk(dublin_central.future_risk, "2030")

    # future baseline: 45, 63, 30, 70, 55 with year factor 1.15
    assert projected.factors.as_dict() == {
        "dependency_ratio": 52,
        "hospital_stress": 65,
        "isolation_score": 38,
        "walkability": 76,
        "environmental_score": 76,
    }
    assert projected.overall == 54


def test_overall_is_rederived_not_scaled(dublin_central) -> None:
    for year in PROJECTION_YEARS:
        projected = project_future_risk(dublin_central.future_risk, year)
        assert projected.overall == compute_overall_score(projected.factors)


def test_far_horizon_clamps_to_hundred() -> None:
    donegal = default_repository().get("donegal")
    projected = project_future_risk(donegal.future_risk, "2050")

    assert projected.factors.dependency_ratio == 100
    assert projected.factors.hospital_stress == 100
    assert projected.factors.isolation_score == 100
    assert projected.factors.walkability == 57
    assert projected.factors.environmental_score == 100
    assert projected.overall == 94


@pytest.mark.parametrize("year", ["1999", "", None, "next decade", 2031])
def test_unrecognised_year_falls_back_to_2030(dublin_central, year) -> None:
    assert resolve_year(year) == "2030"
    assert project_future_risk(dublin_central.future_risk, year) == project_future_risk(
        dublin_central.future_risk, "2030"
    )


def test_integer_year_tokens_are_accepted(dublin_central) -> None:
    assert resolve_year(2040) == "2040"
    assert resolve_year(2040.0) == "2040"
    assert resolve_year(2040.5) == "2030"
    assert project_future_risk(dublin_central.future_risk, 2040) == project_future_risk(
        dublin_central.future_risk, "2040"
    )


def test_later_years_never_lower_risk_factors(dublin_central) -> None:
    previous = None
    for year in PROJECTION_YEARS:
        projected = project_future_risk(dublin_central.future_risk, year)
        if previous is not None:
            assert projected.factors.isolation_score >= previous.factors.isolation_score
            assert projected.factors.environmental_score >= previous.factors.environmental_score
        previous = projected


def test_projection_does_not_mutate_baseline(dublin_central) -> None:
    snapshot = dublin_central.future_risk.as_dict()
    project_future_risk(dublin_central.future_risk, "2050")
    assert dublin_central.future_risk.as_dict() == snapshot
    assert default_repository().get("dublin-central").future_risk.overall == 52


def test_resolve_view(dublin_central) -> None:
    assert resolve_view(dublin_central, "current") is dublin_central.current_risk
    assert resolve_view(dublin_central, "FUTURE", "2030") == project_future_risk(dublin_central.future_risk, "2030")
    with pytest.raises(ValueError):
        resolve_view(dublin_central, "past")
