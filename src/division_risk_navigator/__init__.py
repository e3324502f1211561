from __future__ import annotations

from pathlib import Path
import sys
import tomllib

from .core import apply_scenario, compute_overall_score, project_future_risk
from .data import list_divisions, search
from .models import classify_risk

__version__ = "0.1.0"


def get_runtime_version() -> str:
    candidates: list[Path] = []
    meipass = getattr(sys, "_MEIPASS", "")
    if meipass:
        candidates.append(Path(meipass) / "pyproject.toml")

    candidates.append(Path.cwd() / "pyproject.toml")
    candidates.append(Path(__file__).resolve().parents[2] / "pyproject.toml")

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        if not path.exists():
            continue
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError):
            continue
        project = data.get("project", {}) or {}
        if project.get("name") != "division-risk-navigator":
            continue
        version = str(project.get("version", "")).strip()
        if version:
            return version
    return __version__


__all__ = [
    "__version__",
    "apply_scenario",
    "classify_risk",
    "compute_overall_score",
    "get_runtime_version",
    "list_divisions",
    "project_future_risk",
    "search",
]
