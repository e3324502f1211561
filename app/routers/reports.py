from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from app.config import Settings, get_settings
from app.dependencies import get_repository
from app.services.division_service import build_division_detail_viewmodel
from app.utils.reporting import build_division_report_pdf
from division_risk_navigator.data import DivisionRepository

router = APIRouter(tags=["reports"])


@router.get("/api/divisions/{division_id}/report.pdf")
def download_division_report(
    division_id: str,
    view: str = Query(default=""),
    year: str = Query(default=""),
    repository: DivisionRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    division = repository.get(division_id)
    if not division:
        return JSONResponse(status_code=404, content={"error": "not_found"})
    try:
        vm = build_division_detail_viewmodel(
            division,
            view=view or settings.default_view,
            year=year or settings.default_projection_year,
        )
    except ValueError as exc:
        return JSONResponse(status_code=400, content={"error": "invalid_input", "detail": str(exc)})

    filename = f"division_{division.id}_{vm['view']}{'_' + vm['year'] if vm['year'] else ''}.pdf"
    return Response(
        content=build_division_report_pdf(vm),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
