from .divisions import DIVISION_RECORDS, DivisionRepository, default_repository, list_divisions, search

__all__ = ["DIVISION_RECORDS", "DivisionRepository", "default_repository", "list_divisions", "search"]
