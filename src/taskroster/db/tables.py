"""SQLAlchemy table definitions."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskroster.db.base import Base


class PersonTable(Base):
    """People - owners of tasks."""

    __tablename__ = "person"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # cascade="all" deletes tasks with their person; removing a task from the
    # collection only clears its owner (no delete-orphan).
    tasks: Mapped[list["TaskTable"]] = relationship(
        "TaskTable",
        back_populates="person",
        cascade="all",
        order_by="TaskTable.id",
        lazy="selectin",
    )


class TaskTable(Base):
    """Tasks - optionally owned by one person."""

    __tablename__ = "task"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(
        "startdate", DateTime(timezone=True), nullable=True
    )
    end_date: Mapped[datetime | None] = mapped_column(
        "enddate", DateTime(timezone=True), nullable=True
    )

    # Owner is the source of truth for the association
    person_id: Mapped[int | None] = mapped_column(
        "personid", Integer, ForeignKey("person.id"), nullable=True, index=True
    )
    person: Mapped[PersonTable | None] = relationship(
        "PersonTable", back_populates="tasks", lazy="joined"
    )
