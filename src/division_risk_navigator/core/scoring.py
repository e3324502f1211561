from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..models import (
    FACTOR_LABELS,
    FACTOR_NAMES,
    PROTECTIVE_FACTORS,
    SCORE_MAX,
    RiskAssessment,
    RiskFactors,
    RiskLevel,
    ScenarioModifiers,
    clamp_score,
    classify_risk,
)

logger = logging.getLogger(__name__)

# Single source of truth for the composite score. Must sum to 1.
FACTOR_WEIGHTS: dict[str, Decimal] = {
    "dependency_ratio": Decimal("0.25"),
    "hospital_stress": Decimal("0.30"),
    "isolation_score": Decimal("0.20"),
    "walkability": Decimal("0.10"),
    "environmental_score": Decimal("0.15"),
}


def risk_contribution(name: str, value: int) -> Decimal:
    """Factor value on the risk-increasing scale (protective factors inverted)."""
    score = Decimal(value)
    if name in PROTECTIVE_FACTORS:
        return Decimal(SCORE_MAX) - score
    return score


def compute_overall_score(factors: RiskFactors) -> int:
    total = sum(
        (risk_contribution(name, factors.get(name)) * FACTOR_WEIGHTS[name] for name in FACTOR_NAMES),
        Decimal(0),
    )
    return clamp_score(total)


def assess(factors: RiskFactors) -> RiskAssessment:
    return RiskAssessment(overall=compute_overall_score(factors), factors=factors)


def _apply_change(value: int, change: float) -> int:
    base = Decimal(value)
    return clamp_score(base + base * Decimal(str(change)) / Decimal(100))


def apply_scenario(base: RiskAssessment, modifiers: ScenarioModifiers) -> RiskAssessment:
    """Scale each factor by its percentage change and re-derive the overall score.

    Changes are relative to the factor's value: -10% on 80 gives 72. Each
    factor is rounded and clamped before the overall score is recomputed.
    With every change at zero the baseline comes back untouched, including
    stored baselines whose overall predates the current weights.
    """
    if modifiers.is_neutral():
        return base

    factors = RiskFactors(
        **{name: _apply_change(base.factors.get(name), modifiers.change_for(name)) for name in FACTOR_NAMES}
    )
    result = assess(factors)
    logger.debug("Scenario recomputed: overall %s -> %s (%s)", base.overall, result.overall, modifiers.as_dict())
    return result


@dataclass(slots=True, frozen=True)
class FactorChange:
    name: str
    before: int
    after: int

    @property
    def label(self) -> str:
        return FACTOR_LABELS[self.name]

    @property
    def delta(self) -> int:
        return self.after - self.before

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "before": self.before,
            "after": self.after,
            "delta": self.delta,
        }


@dataclass(slots=True, frozen=True)
class ScenarioImpact:
    base: RiskAssessment
    modified: RiskAssessment
    modifiers: ScenarioModifiers

    @property
    def base_level(self) -> RiskLevel:
        return classify_risk(self.base.overall)

    @property
    def modified_level(self) -> RiskLevel:
        return classify_risk(self.modified.overall)

    @property
    def overall_delta(self) -> int:
        return self.modified.overall - self.base.overall

    @property
    def factor_changes(self) -> tuple[FactorChange, ...]:
        return tuple(
            FactorChange(name=name, before=self.base.factors.get(name), after=self.modified.factors.get(name))
            for name in FACTOR_NAMES
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "modifiers": self.modifiers.as_dict(),
            "original": {
                **self.base.as_dict(),
                "risk_level": self.base_level.value,
                "risk_label": self.base_level.label,
            },
            "modified": {
                **self.modified.as_dict(),
                "risk_level": self.modified_level.value,
                "risk_label": self.modified_level.label,
            },
            "overall_delta": self.overall_delta,
            "level_changed": self.base_level is not self.modified_level,
            "factor_changes": [change.as_dict() for change in self.factor_changes],
        }


def scenario_impact(base: RiskAssessment, modifiers: ScenarioModifiers) -> ScenarioImpact:
    return ScenarioImpact(base=base, modified=apply_scenario(base, modifiers), modifiers=modifiers)
