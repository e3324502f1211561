from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"

for path in (ROOT_DIR, SRC_DIR):
    value = str(path)
    if path.exists() and value not in sys.path:
        sys.path.insert(0, value)


@pytest.fixture
def dublin_central_factors():
    from division_risk_navigator.models import RiskFactors

    return RiskFactors(
        dependency_ratio=35,
        hospital_stress=58,
        isolation_score=22,
        walkability=75,
        environmental_score=45,
    )
