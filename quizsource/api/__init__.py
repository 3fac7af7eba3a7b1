"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from quizsource.api import app

    uvicorn quizsource.api:app --reload
"""

from quizsource.api.app import app

__all__ = ["app"]
