import logging
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from app.config import Settings, get_settings
from division_risk_navigator.data import DivisionRepository, default_repository
from division_risk_navigator.io import load_divisions_file

logger = logging.getLogger(__name__)


@lru_cache
def _repository_from_file(path: Path) -> DivisionRepository:
    repository = DivisionRepository(load_divisions_file(path))
    logger.info("Loaded %s divisions from %s", len(repository), path)
    return repository


def get_repository(settings: Settings = Depends(get_settings)) -> DivisionRepository:
    if settings.divisions_file is not None:
        return _repository_from_file(settings.divisions_file.resolve())
    return default_repository()
