from .projection import (
    DEFAULT_PROJECTION_YEAR,
    FACTOR_HORIZON_SENSITIVITY,
    PROJECTION_YEARS,
    VIEW_MODES,
    YEAR_FACTORS,
    project_future_risk,
    resolve_view,
    resolve_year,
    year_factor,
)
from .scoring import (
    FACTOR_WEIGHTS,
    FactorChange,
    ScenarioImpact,
    apply_scenario,
    assess,
    compute_overall_score,
    risk_contribution,
    scenario_impact,
)

__all__ = [
    "DEFAULT_PROJECTION_YEAR",
    "FACTOR_HORIZON_SENSITIVITY",
    "FACTOR_WEIGHTS",
    "PROJECTION_YEARS",
    "VIEW_MODES",
    "YEAR_FACTORS",
    "FactorChange",
    "ScenarioImpact",
    "apply_scenario",
    "assess",
    "compute_overall_score",
    "project_future_risk",
    "resolve_view",
    "resolve_year",
    "risk_contribution",
    "scenario_impact",
    "year_factor",
]
