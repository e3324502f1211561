from __future__ import annotations

from typing import Any

from division_risk_navigator.core import (
    DEFAULT_PROJECTION_YEAR,
    FACTOR_HORIZON_SENSITIVITY,
    FACTOR_WEIGHTS,
    PROJECTION_YEARS,
    VIEW_MODES,
    YEAR_FACTORS,
    compute_overall_score,
    project_future_risk,
    resolve_view,
    resolve_year,
    scenario_impact,
)
from division_risk_navigator.data import DivisionRepository
from division_risk_navigator.models import (
    FACTOR_LABELS,
    FACTOR_NAMES,
    MODIFIER_MAX,
    MODIFIER_MIN,
    MODIFIER_STEP,
    PROTECTIVE_FACTORS,
    RISK_LEVEL_THRESHOLDS,
    ElectoralDivision,
    RiskAssessment,
    RiskLevel,
    ScenarioModifiers,
    classify_risk,
)


def normalize_view(view: str | None, default: str = "current") -> str:
    mode = str(view or default).strip().lower()
    if mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode: {view!r}. Expected one of {', '.join(VIEW_MODES)}.")
    return mode


def _view_year(view: str, year: str | None) -> str | None:
    return resolve_year(year) if view == "future" else None


def _assessment_payload(assessment: RiskAssessment) -> dict[str, Any]:
    level = classify_risk(assessment.overall)
    return {
        **assessment.as_dict(),
        "risk_level": level.value,
        "risk_label": level.label,
    }


def _division_header(division: ElectoralDivision) -> dict[str, Any]:
    return {
        "id": division.id,
        "name": division.name,
        "county": division.county,
        "population": division.population,
        "coordinates": list(division.coordinates),
    }


def build_division_summary(division: ElectoralDivision, *, view: str, year: str | None) -> dict[str, Any]:
    assessment = resolve_view(division, view, year)
    level = classify_risk(assessment.overall)
    return {
        **_division_header(division),
        "overall": assessment.overall,
        "risk_level": level.value,
        "risk_label": level.label,
    }


def build_division_list_viewmodel(
    repository: DivisionRepository,
    *,
    q: str = "",
    view: str = "current",
    year: str | None = None,
) -> dict[str, Any]:
    mode = normalize_view(view)
    resolved_year = _view_year(mode, year)
    rows = repository.search(q)
    items = [build_division_summary(division, view=mode, year=resolved_year) for division in rows]
    level_counts: dict[str, int] = {}
    for item in items:
        level_counts[item["risk_level"]] = level_counts.get(item["risk_level"], 0) + 1
    return {
        "view": mode,
        "year": resolved_year,
        "q": q,
        "total": len(items),
        "level_counts": level_counts,
        "items": items,
    }


def build_factor_rows(assessment: RiskAssessment) -> list[dict[str, Any]]:
    return [
        {
            "name": name,
            "label": FACTOR_LABELS[name],
            "value": assessment.factors.get(name),
            "weight": float(FACTOR_WEIGHTS[name]),
            "protective": name in PROTECTIVE_FACTORS,
        }
        for name in FACTOR_NAMES
    ]


def build_division_detail_viewmodel(
    division: ElectoralDivision,
    *,
    view: str = "current",
    year: str | None = None,
) -> dict[str, Any]:
    mode = normalize_view(view)
    resolved_year = _view_year(mode, year)
    assessment = resolve_view(division, mode, resolved_year)
    comparison_year = resolve_year(year)
    projected_future = project_future_risk(division.future_risk, comparison_year)

    return {
        "division": _division_header(division),
        "view": mode,
        "year": resolved_year,
        "assessment": {
            **_assessment_payload(assessment),
            # Stored baselines keep their authored overall; this is the formula value.
            "computed_overall": compute_overall_score(assessment.factors),
            "is_reference_baseline": mode == "current",
        },
        "factor_rows": build_factor_rows(assessment),
        "comparison": {
            "current": _assessment_payload(division.current_risk),
            "future": _assessment_payload(projected_future),
            "future_year": comparison_year,
        },
    }


def build_scenario_viewmodel(
    division: ElectoralDivision,
    modifiers: ScenarioModifiers,
    *,
    view: str = "current",
    year: str | None = None,
) -> dict[str, Any]:
    mode = normalize_view(view)
    resolved_year = _view_year(mode, year)
    impact = scenario_impact(resolve_view(division, mode, resolved_year), modifiers)
    return {
        "division": _division_header(division),
        "view": mode,
        "year": resolved_year,
        **impact.as_dict(),
    }


def build_model_viewmodel() -> dict[str, Any]:
    return {
        "factors": [
            {
                "name": name,
                "label": FACTOR_LABELS[name],
                "weight": float(FACTOR_WEIGHTS[name]),
                "protective": name in PROTECTIVE_FACTORS,
                "horizon_sensitivity": float(FACTOR_HORIZON_SENSITIVITY[name]),
            }
            for name in FACTOR_NAMES
        ],
        "projection_years": {year: float(YEAR_FACTORS[year]) for year in PROJECTION_YEARS},
        "default_projection_year": DEFAULT_PROJECTION_YEAR,
        "risk_levels": [
            {"level": level.value, "label": level.label, "below": upper} for upper, level in RISK_LEVEL_THRESHOLDS
        ]
        + [{"level": RiskLevel.VERY_HIGH.value, "label": RiskLevel.VERY_HIGH.label, "below": None}],
        "modifier_range": {"min": MODIFIER_MIN, "max": MODIFIER_MAX, "step": MODIFIER_STEP},
    }
