from .risk import (
    FACTOR_LABELS,
    FACTOR_NAMES,
    MODIFIER_MAX,
    MODIFIER_MIN,
    MODIFIER_STEP,
    NEUTRAL_FACTOR_SCORE,
    OPTIONAL_FACTORS,
    PROTECTIVE_FACTORS,
    RISK_LEVEL_THRESHOLDS,
    SCORE_MAX,
    SCORE_MIN,
    ElectoralDivision,
    InvalidFactorError,
    RawDivision,
    RawRiskAssessment,
    RawRiskFactors,
    RiskAssessment,
    RiskFactors,
    RiskLevel,
    ScenarioModifiers,
    clamp_score,
    classify_risk,
    round_half_up,
    to_division,
    to_risk_assessment,
    to_risk_factors,
    to_scenario_modifiers,
)

__all__ = [
    "FACTOR_LABELS",
    "FACTOR_NAMES",
    "MODIFIER_MAX",
    "MODIFIER_MIN",
    "MODIFIER_STEP",
    "NEUTRAL_FACTOR_SCORE",
    "OPTIONAL_FACTORS",
    "PROTECTIVE_FACTORS",
    "RISK_LEVEL_THRESHOLDS",
    "SCORE_MAX",
    "SCORE_MIN",
    "ElectoralDivision",
    "InvalidFactorError",
    "RawDivision",
    "RawRiskAssessment",
    "RawRiskFactors",
    "RiskAssessment",
    "RiskFactors",
    "RiskLevel",
    "ScenarioModifiers",
    "clamp_score",
    "classify_risk",
    "round_half_up",
    "to_division",
    "to_risk_assessment",
    "to_risk_factors",
    "to_scenario_modifiers",
]
