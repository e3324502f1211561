from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable, Iterator, Mapping

from ..models import ElectoralDivision, RawDivision, RawRiskAssessment, to_division

logger = logging.getLogger(__name__)


def _assessment(overall: int, dependency: int, hospital: int, isolation: int, walk: int, env: int) -> RawRiskAssessment:
    return {
        "overall": overall,
        "factors": {
            "dependency_ratio": dependency,
            "hospital_stress": hospital,
            "isolation_score": isolation,
            "walkability": walk,
            "environmental_score": env,
        },
    }


def _record(
    division_id: str,
    name: str,
    county: str,
    population: int,
    coordinates: tuple[float, float],
    current: RawRiskAssessment,
    future: RawRiskAssessment,
) -> RawDivision:
    return {
        "id": division_id,
        "name": name,
        "county": county,
        "population": population,
        "coordinates": list(coordinates),
        "current_risk": current,
        "future_risk": future,
    }


# Hand-authored reference baselines. Their overall scores were set under an
# earlier weighting and are kept verbatim; computed views re-derive overall.
DIVISION_RECORDS: tuple[RawDivision, ...] = (
    _record(
        "dublin-central", "Dublin Central", "Dublin", 125000, (53.3498, -6.2603),
        _assessment(42, 35, 58, 22, 75, 45),
        _assessment(52, 45, 63, 30, 70, 55),
    ),
    _record(
        "dublin-north", "Dublin North", "Dublin", 118000, (53.4017, -6.3178),
        _assessment(35, 30, 48, 20, 65, 38),
        _assessment(45, 40, 55, 28, 60, 48),
    ),
    _record(
        "cork-south-central", "Cork South-Central", "Cork", 105000, (51.8979, -8.4706),
        _assessment(55, 48, 62, 40, 65, 58),
        _assessment(68, 57, 70, 52, 60, 72),
    ),
    _record(
        "galway-west", "Galway West", "Galway", 92000, (53.2707, -9.0568),
        _assessment(48, 44, 52, 38, 58, 43),
        _assessment(57, 52, 60, 45, 52, 55),
    ),
    _record(
        "limerick-city", "Limerick City", "Limerick", 85000, (52.6638, -8.6267),
        _assessment(62, 56, 68, 45, 60, 64),
        _assessment(72, 65, 75, 55, 55, 76),
    ),
    _record(
        "donegal", "Donegal", "Donegal", 68000, (54.9549, -7.7348),
        _assessment(72, 65, 75, 80, 45, 78),
        _assessment(80, 72, 82, 85, 40, 85),
    ),
    _record(
        "kerry", "Kerry", "Kerry", 72000, (52.1543, -9.5669),
        _assessment(58, 60, 55, 70, 42, 63),
        _assessment(65, 67, 62, 75, 38, 68),
    ),
    _record(
        "meath-east", "Meath East", "Meath", 65000, (53.6123, -6.6102),
        _assessment(40, 42, 50, 35, 52, 47),
        _assessment(48, 48, 58, 42, 48, 54),
    ),
    _record(
        "waterford", "Waterford", "Waterford", 78000, (52.2593, -7.1128),
        _assessment(53, 50, 58, 42, 55, 51),
        _assessment(62, 57, 65, 49, 50, 61),
    ),
    _record(
        "sligo-leitrim", "Sligo-Leitrim", "Sligo", 63000, (54.2766, -8.4761),
        _assessment(58, 54, 60, 65, 48, 45),
        _assessment(67, 62, 68, 72, 45, 52),
    ),
    _record(
        "wexford", "Wexford", "Wexford", 70000, (52.3369, -6.4633),
        _assessment(51, 47, 54, 58, 52, 48),
        _assessment(60, 55, 62, 65, 48, 57),
    ),
    _record(
        "clare", "Clare", "Clare", 76000, (52.9112, -8.9194),
        _assessment(47, 45, 42, 53, 49, 40),
        _assessment(56, 52, 48, 61, 45, 47),
    ),
    _record(
        "laois-offaly", "Laois-Offaly", "Laois", 84000, (53.0329, -7.3021),
        _assessment(45, 40, 43, 50, 47, 42),
        _assessment(53, 46, 51, 56, 42, 51),
    ),
    _record(
        "kilkenny", "Kilkenny", "Kilkenny", 64000, (52.6477, -7.2561),
        _assessment(39, 37, 41, 45, 54, 32),
        _assessment(48, 44, 48, 52, 50, 39),
    ),
    _record(
        "tipperary", "Tipperary", "Tipperary", 81000, (52.4738, -8.1565),
        _assessment(56, 51, 47, 63, 41, 55),
        _assessment(65, 58, 54, 70, 38, 61),
    ),
)


class DivisionRepository:
    """Read-only, insertion-ordered set of divisions keyed by id."""

    def __init__(self, divisions: Iterable[ElectoralDivision]) -> None:
        self._divisions: tuple[ElectoralDivision, ...] = tuple(divisions)
        self._by_id: dict[str, ElectoralDivision] = {}
        for division in self._divisions:
            if division.id in self._by_id:
                raise ValueError(f"Duplicate division id: {division.id}")
            self._by_id[division.id] = division

    @classmethod
    def from_payloads(cls, payloads: Iterable[Mapping[str, object]]) -> DivisionRepository:
        return cls(to_division(payload) for payload in payloads)

    def __len__(self) -> int:
        return len(self._divisions)

    def __iter__(self) -> Iterator[ElectoralDivision]:
        return iter(self._divisions)

    def list_divisions(self) -> list[ElectoralDivision]:
        return list(self._divisions)

    def get(self, division_id: str) -> ElectoralDivision | None:
        return self._by_id.get(division_id)

    def search(self, query: str | None) -> list[ElectoralDivision]:
        needle = (query or "").strip().lower()
        if not needle:
            return self.list_divisions()
        return [
            division
            for division in self._divisions
            if needle in division.name.lower() or needle in division.county.lower()
        ]


@lru_cache
def default_repository() -> DivisionRepository:
    repository = DivisionRepository.from_payloads(DIVISION_RECORDS)
    logger.info("Loaded %s built-in divisions", len(repository))
    return repository


def list_divisions() -> list[ElectoralDivision]:
    return default_repository().list_divisions()


def search(query: str | None) -> list[ElectoralDivision]:
    return default_repository().search(query)
