import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.dependencies import get_repository
from app.routers import api, divisions, reports
from division_risk_navigator import get_runtime_version


def create_app() -> FastAPI:
    # Respect runtime env overrides (tests, packaged launcher, temporary runs).
    get_settings.cache_clear()
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins or ["http://127.0.0.1", "http://localhost"],
        allow_origin_regex=settings.cors_allow_origin_regex,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Load the fixture at startup so a malformed DIVISIONS_FILE fails fast.
    repository = get_repository(settings)
    logging.getLogger(__name__).info(
        "%s ready (%s divisions, env=%s)", settings.app_name, len(repository), settings.app_env
    )

    app.include_router(api.router)
    app.include_router(divisions.router)
    app.include_router(reports.router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/api/health")
    def api_health():
        return {"status": "ok", "version": get_runtime_version()}

    return app


app = create_app()
