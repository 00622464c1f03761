"""Shared helpers for Supabase repositories."""

import logging
from typing import Protocol

from postgrest.exceptions import APIError

from intake_tracker.domain.errors import StoreError

_logger = logging.getLogger(__name__)


class _Executable(Protocol):
    def execute(self) -> object: ...


def execute(query: _Executable, action: str):  # type: ignore[no-untyped-def]
    """Run a PostgREST query, raising ``StoreError`` on API failures."""
    try:
        return query.execute()
    except APIError as exc:
        _logger.warning("Supabase %s failed: %s", action, exc.message)
        raise StoreError(f"Failed to {action}") from exc
