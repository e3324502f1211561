from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Mapping, TypedDict


FACTOR_NAMES = (
    "dependency_ratio",
    "hospital_stress",
    "isolation_score",
    "walkability",
    "environmental_score",
)

FACTOR_LABELS: dict[str, str] = {
    "dependency_ratio": "Dependency Ratio",
    "hospital_stress": "Hospital Stress",
    "isolation_score": "Isolation Score",
    "walkability": "Walkability",
    "environmental_score": "Environmental Score",
}

# Higher walkability lowers risk; every other factor raises it.
PROTECTIVE_FACTORS = frozenset({"walkability"})

# Added after the first schema revision; older records may omit it.
OPTIONAL_FACTORS = frozenset({"environmental_score"})

SCORE_MIN = 0
SCORE_MAX = 100
NEUTRAL_FACTOR_SCORE = 50

MODIFIER_MIN = -50
MODIFIER_MAX = 50
MODIFIER_STEP = 5

_CAMEL_FACTOR_KEYS: dict[str, str] = {
    "dependencyRatio": "dependency_ratio",
    "hospitalStress": "hospital_stress",
    "isolationScore": "isolation_score",
    "walkability": "walkability",
    "environmentalScore": "environmental_score",
}


class InvalidFactorError(ValueError):
    """Raised when a factor, score or modifier is not a finite number."""


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER = (RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.VERY_HIGH)

# (exclusive upper bound, level); anything at or above the last bound is very-high.
RISK_LEVEL_THRESHOLDS: tuple[tuple[int, RiskLevel], ...] = (
    (25, RiskLevel.LOW),
    (50, RiskLevel.MEDIUM),
    (75, RiskLevel.HIGH),
)


def classify_risk(score: float) -> RiskLevel:
    """Map an overall score onto its risk level.

    Intervals are half-open: 24 is low, 25 is medium. The score is expected
    to be clamped already; values outside [0, 100] still fall into the
    lowest or highest level.
    """
    for upper, level in RISK_LEVEL_THRESHOLDS:
        if score < upper:
            return level
    return RiskLevel.VERY_HIGH


def round_half_up(value: Decimal | float | int) -> int:
    exact = value if isinstance(value, Decimal) else Decimal(str(value))
    if not exact.is_finite():
        raise InvalidFactorError(f"Score must be a finite number, got {value!r}.")
    return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def clamp_score(value: Decimal | float | int) -> int:
    return max(SCORE_MIN, min(SCORE_MAX, round_half_up(value)))


def _coerce_number(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidFactorError(f"{name} must be a number, got a boolean.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidFactorError(f"{name} must be a number, got {value!r}.") from None
    if not math.isfinite(number):
        raise InvalidFactorError(f"{name} must be a finite number, got {value!r}.")
    return number


class RawRiskFactors(TypedDict, total=False):
    dependency_ratio: float
    hospital_stress: float
    isolation_score: float
    walkability: float
    environmental_score: float


class RawRiskAssessment(TypedDict, total=False):
    overall: float
    factors: RawRiskFactors


class RawDivision(TypedDict, total=False):
    id: str
    name: str
    county: str
    population: int
    coordinates: list[float]
    current_risk: RawRiskAssessment
    future_risk: RawRiskAssessment


@dataclass(slots=True, frozen=True)
class RiskFactors:
    dependency_ratio: int
    hospital_stress: int
    isolation_score: int
    walkability: int
    environmental_score: int = NEUTRAL_FACTOR_SCORE

    def __post_init__(self) -> None:
        for name in FACTOR_NAMES:
            object.__setattr__(self, name, clamp_score(_coerce_number(name, getattr(self, name))))

    def get(self, name: str) -> int:
        if name not in FACTOR_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in FACTOR_NAMES}


@dataclass(slots=True, frozen=True)
class RiskAssessment:
    overall: int
    factors: RiskFactors

    def __post_init__(self) -> None:
        object.__setattr__(self, "overall", clamp_score(_coerce_number("overall", self.overall)))

    @property
    def risk_level(self) -> RiskLevel:
        return classify_risk(self.overall)

    def as_dict(self) -> dict[str, Any]:
        return {"overall": self.overall, "factors": self.factors.as_dict()}


@dataclass(slots=True, frozen=True)
class ScenarioModifiers:
    """Signed percentage changes, one per factor. Zero leaves a factor as is."""

    dependency_ratio_change: float = 0.0
    hospital_stress_change: float = 0.0
    isolation_score_change: float = 0.0
    walkability_change: float = 0.0
    environmental_score_change: float = 0.0

    def __post_init__(self) -> None:
        for name in FACTOR_NAMES:
            field = f"{name}_change"
            object.__setattr__(self, field, _coerce_number(field, getattr(self, field)))

    def change_for(self, factor: str) -> float:
        if factor not in FACTOR_NAMES:
            raise KeyError(factor)
        return getattr(self, f"{factor}_change")

    def is_neutral(self) -> bool:
        return all(self.change_for(name) == 0 for name in FACTOR_NAMES)

    def as_dict(self) -> dict[str, float]:
        return {f"{name}_change": self.change_for(name) for name in FACTOR_NAMES}


@dataclass(slots=True, frozen=True)
class ElectoralDivision:
    id: str
    name: str
    county: str
    population: int
    coordinates: tuple[float, float]
    current_risk: RiskAssessment
    future_risk: RiskAssessment

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "county": self.county,
            "population": self.population,
            "coordinates": list(self.coordinates),
            "current_risk": self.current_risk.as_dict(),
            "future_risk": self.future_risk.as_dict(),
        }


def to_risk_factors(payload: Mapping[str, Any]) -> RiskFactors:
    """Build factors from a snake_case or camelCase mapping.

    Values are clamped to [0, 100] and rounded half-up. A missing
    environmental score reads as the neutral midpoint. Giving the same
    factor under both spellings is an error.
    """
    values: dict[str, Any] = {}
    for key, value in payload.items():
        name = _CAMEL_FACTOR_KEYS.get(key, key)
        if name not in FACTOR_NAMES:
            continue
        if name in values:
            raise InvalidFactorError(f"Risk factor {name} is given more than once.")
        values[name] = value

    factors: dict[str, Any] = {}
    for name in FACTOR_NAMES:
        raw = values.get(name)
        if raw is None:
            if name not in OPTIONAL_FACTORS:
                raise InvalidFactorError(f"Missing risk factor: {name}.")
            raw = NEUTRAL_FACTOR_SCORE
        factors[name] = raw
    return RiskFactors(**factors)


def to_risk_assessment(payload: Mapping[str, Any]) -> RiskAssessment:
    """Load a stored assessment record as-is; its overall is not re-derived."""
    factors_payload = payload.get("factors")
    if not isinstance(factors_payload, Mapping):
        raise InvalidFactorError("Risk assessment must contain a 'factors' object.")
    if payload.get("overall") is None:
        raise InvalidFactorError("Risk assessment must contain an 'overall' score.")
    return RiskAssessment(overall=payload["overall"], factors=to_risk_factors(factors_payload))


def _modifier_field(key: str) -> str | None:
    name = _CAMEL_FACTOR_KEYS.get(key.removesuffix("Change"), key.removesuffix("_change"))
    if name in FACTOR_NAMES:
        return f"{name}_change"
    return None


def to_scenario_modifiers(payload: Mapping[str, Any]) -> ScenarioModifiers:
    """Accepts ``hospital_stress_change``, ``hospitalStressChange`` or ``hospital_stress``."""
    changes: dict[str, Any] = {}
    for key, value in payload.items():
        field = _modifier_field(str(key))
        if field is None:
            raise InvalidFactorError(f"Unknown scenario modifier: {key}.")
        if field in changes:
            raise InvalidFactorError(f"Scenario modifier {field} is given more than once.")
        changes[field] = 0.0 if value is None else value
    return ScenarioModifiers(**changes)


def _first_present(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def to_division(payload: Mapping[str, Any]) -> ElectoralDivision:
    division_id = str(payload.get("id", "") or "").strip()
    if not division_id:
        raise ValueError("Each division must have a non-empty id.")

    coordinates = payload.get("coordinates")
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) != 2:
        raise ValueError(f"Division {division_id}: coordinates must be a [lat, lng] pair.")
    lat, lng = (_coerce_number("coordinates", value) for value in coordinates)

    current = _first_present(payload, "current_risk", "currentRisk")
    future = _first_present(payload, "future_risk", "futureRisk")
    if not isinstance(current, Mapping) or not isinstance(future, Mapping):
        raise ValueError(f"Division {division_id}: current and future risk assessments are required.")

    return ElectoralDivision(
        id=division_id,
        name=str(payload.get("name", "") or division_id),
        county=str(payload.get("county", "") or ""),
        population=int(_coerce_number("population", payload.get("population", 0) or 0)),
        coordinates=(lat, lng),
        current_risk=to_risk_assessment(current),
        future_risk=to_risk_assessment(future),
    )
