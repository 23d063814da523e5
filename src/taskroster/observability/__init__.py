"""Observability helpers for TaskRoster."""

from taskroster.observability.metrics import metrics

__all__ = ["metrics"]
