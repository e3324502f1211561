from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.dependencies import get_repository
from app.services.division_service import (
    build_division_detail_viewmodel,
    build_division_list_viewmodel,
    build_scenario_viewmodel,
)
from division_risk_navigator.data import DivisionRepository
from division_risk_navigator.models import to_scenario_modifiers

router = APIRouter(prefix="/api/divisions", tags=["divisions"])


def _invalid(exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "invalid_input", "detail": str(exc)})


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "not_found"})


@router.get("")
def api_list_divisions(
    q: str = Query(default=""),
    view: str = Query(default=""),
    year: str = Query(default=""),
    repository: DivisionRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    try:
        return build_division_list_viewmodel(
            repository,
            q=q,
            view=view or settings.default_view,
            year=year or settings.default_projection_year,
        )
    except ValueError as exc:
        return _invalid(exc)


@router.get("/{division_id}")
def api_division_detail(
    division_id: str,
    view: str = Query(default=""),
    year: str = Query(default=""),
    repository: DivisionRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    division = repository.get(division_id)
    if not division:
        return _not_found()
    try:
        return build_division_detail_viewmodel(
            division,
            view=view or settings.default_view,
            year=year or settings.default_projection_year,
        )
    except ValueError as exc:
        return _invalid(exc)


@router.get("/{division_id}/scenario")
def api_division_scenario(
    division_id: str,
    view: str = Query(default=""),
    year: str = Query(default=""),
    dependency_ratio_change: float = Query(default=0.0),
    hospital_stress_change: float = Query(default=0.0),
    isolation_score_change: float = Query(default=0.0),
    walkability_change: float = Query(default=0.0),
    environmental_score_change: float = Query(default=0.0),
    repository: DivisionRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    division = repository.get(division_id)
    if not division:
        return _not_found()
    try:
        modifiers = to_scenario_modifiers(
            {
                "dependency_ratio_change": dependency_ratio_change,
                "hospital_stress_change": hospital_stress_change,
                "isolation_score_change": isolation_score_change,
                "walkability_change": walkability_change,
                "environmental_score_change": environmental_score_change,
            }
        )
        return build_scenario_viewmodel(
            division,
            modifiers,
            view=view or settings.default_view,
            year=year or settings.default_projection_year,
        )
    except ValueError as exc:
        return _invalid(exc)
