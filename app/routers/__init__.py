from app.routers import api, divisions, reports

__all__ = [
    "api",
    "divisions",
    "reports",
]
