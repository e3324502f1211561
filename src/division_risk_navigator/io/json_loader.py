from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..core import assess
from ..models import ElectoralDivision, RiskAssessment, to_division, to_risk_assessment, to_risk_factors


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def load_assessment_file(path: Path) -> RiskAssessment:
    """Read an assessment, or a bare factor map whose overall is then derived."""
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise ValueError("Input JSON must be an object of risk factors or a risk assessment.")
    if "factors" not in raw:
        return assess(to_risk_factors(raw))
    if raw.get("overall") is None:
        factors = raw["factors"]
        if not isinstance(factors, dict):
            raise ValueError("'factors' must be an object.")
        return assess(to_risk_factors(factors))
    return to_risk_assessment(raw)


def load_divisions_file(path: Path) -> list[ElectoralDivision]:
    raw = _read_json(path)
    if isinstance(raw, dict):
        raw = raw.get("divisions")
    if not isinstance(raw, list):
        raise ValueError("Divisions JSON must be a list, or an object with a 'divisions' list.")
    divisions: list[ElectoralDivision] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError("Each division must be an object.")
        divisions.append(to_division(item))
    return divisions


def dump_result_file(path: Path, payload: dict[str, object]) -> None:
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
