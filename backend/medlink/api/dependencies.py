"""
Shared dependencies and helpers for API endpoints.
"""
import logging
from typing import Any

from fastapi import HTTPException, status

from medlink.store.guard import Outcome, StoreResult

logger = logging.getLogger(__name__)


def unwrap(result: StoreResult, *, not_found_detail: str = None) -> Any:
    """
    Turn a StoreResult into a response value.

    Degraded reads still return their shaped default so the UI can render.
    Permanent store errors (bad schema, bad credentials, constraint violations)
    become 503 instead of being masked. ``not_found_detail`` turns a missing
    record with no fallback value into a 404.
    """
    if result.outcome is Outcome.PERMANENT_ERROR:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Data store rejected the request",
        )
    if result.outcome is Outcome.NOT_FOUND and result.value is None and not_found_detail:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found_detail)
    return result.value
