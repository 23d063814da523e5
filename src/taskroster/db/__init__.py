"""TaskRoster database layer."""

from taskroster.db.base import Base, close_db, init_db
from taskroster.db.tables import PersonTable, TaskTable

__all__ = [
    "Base",
    "PersonTable",
    "TaskTable",
    "close_db",
    "init_db",
]
