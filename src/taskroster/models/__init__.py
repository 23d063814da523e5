"""TaskRoster data models."""

from taskroster.models.audit import AuditRecord
from taskroster.models.entities import Person, Task

__all__ = [
    "AuditRecord",
    "Person",
    "Task",
]
