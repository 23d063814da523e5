"""TaskRoster HTTP API."""

from taskroster.api.router import router

__all__ = ["router"]
