from __future__ import annotations

import logging
from decimal import Decimal

from ..models import FACTOR_NAMES, ElectoralDivision, RiskAssessment, RiskFactors, clamp_score
from .scoring import assess

logger = logging.getLogger(__name__)

DEFAULT_PROJECTION_YEAR = "2030"

# Hand-picked horizon multipliers, not a forecast.
YEAR_FACTORS: dict[str, Decimal] = {
    "2025": Decimal("1.05"),
    "2030": Decimal("1.15"),
    "2035": Decimal("1.25"),
    "2040": Decimal("1.35"),
    "2050": Decimal("1.5"),
}

PROJECTION_YEARS = tuple(YEAR_FACTORS)

FACTOR_HORIZON_SENSITIVITY: dict[str, Decimal] = {
    "dependency_ratio": Decimal("1.0"),
    "hospital_stress": Decimal("0.9"),
    "isolation_score": Decimal("1.1"),
    "walkability": Decimal("0.95"),
    "environmental_score": Decimal("1.2"),
}

VIEW_MODES = ("current", "future")


def resolve_year(year: str | int | float | None) -> str:
    if isinstance(year, float) and year.is_integer():
        year = int(year)
    token = str(year).strip() if year is not None else ""
    if token in YEAR_FACTORS:
        return token
    logger.debug("Unrecognised projection year %r, using %s", year, DEFAULT_PROJECTION_YEAR)
    return DEFAULT_PROJECTION_YEAR


def year_factor(year: str | int | None) -> Decimal:
    return YEAR_FACTORS[resolve_year(year)]


def project_future_risk(future_baseline: RiskAssessment, year: str | int | None = None) -> RiskAssessment:
    """Time-scale a stored future baseline to the requested horizon.

    Every factor is multiplied by the year factor and its own sensitivity,
    rounded, and clamped to [0, 100]. The overall score is then re-derived
    from the scaled factors rather than scaled itself.
    """
    scale = year_factor(year)
    factors = RiskFactors(
        **{
            name: clamp_score(Decimal(future_baseline.factors.get(name)) * scale * FACTOR_HORIZON_SENSITIVITY[name])
            for name in FACTOR_NAMES
        }
    )
    return assess(factors)


def resolve_view(division: ElectoralDivision, view: str = "current", year: str | int | None = None) -> RiskAssessment:
    mode = (view or "current").strip().lower()
    if mode == "current":
        return division.current_risk
    if mode == "future":
        return project_future_risk(division.future_risk, year)
    raise ValueError(f"Unknown view mode: {view!r}. Expected one of {', '.join(VIEW_MODES)}.")
