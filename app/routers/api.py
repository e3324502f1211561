from __future__ import annotations

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from app.services.division_service import build_model_viewmodel
from division_risk_navigator.models import InvalidFactorError, clamp_score, classify_risk

router = APIRouter(prefix="/api", tags=["api"])


@router.get("/classify")
def api_classify(score: float = Query(...)):
    try:
        clamped = clamp_score(score)
    except InvalidFactorError as exc:
        return JSONResponse(status_code=400, content={"error": "invalid_input", "detail": str(exc)})
    level = classify_risk(clamped)
    return {"score": clamped, "risk_level": level.value, "label": level.label}


@router.get("/model")
def api_model():
    return build_model_viewmodel()
