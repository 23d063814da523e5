"""Database repositories for TaskRoster entities.

Both repositories expose the same generic CRUD surface: ``find_all``,
``find_by_id``, ``save`` and ``delete``. ``save`` behaves like a merge: an
entity without an id, or with an id the store does not know, is inserted
with a freshly assigned id; otherwise the stored fields are replaced by the
given ones.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskroster.db.tables import PersonTable, TaskTable
from taskroster.models import Person, Task


def task_row_to_model(row: TaskTable) -> Task:
    """Convert a task row to its wire model (owner omitted)."""
    return Task(
        id=row.id,
        name=row.name,
        description=row.description,
        start_date=row.start_date,
        end_date=row.end_date,
    )


def person_row_to_model(row: PersonTable) -> Person:
    """Convert a person row, embedding its tasks."""
    return Person(
        id=row.id,
        name=row.name,
        tasks=[task_row_to_model(task) for task in row.tasks],
    )


async def merge_task_row(session: AsyncSession, task: Task) -> TaskTable:
    """Load the row for ``task`` (or stage a new one) and copy the task fields onto it."""
    row = await session.get(TaskTable, task.id) if task.id is not None else None
    if row is None:
        row = TaskTable()
        session.add(row)
    row.name = task.name
    row.description = task.description
    row.start_date = task.start_date
    row.end_date = task.end_date
    return row


class TaskRepository:
    """Repository for task operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> list[Task]:
        """List every task, owned or not."""
        result = await self.session.execute(select(TaskTable).order_by(TaskTable.id))
        return [task_row_to_model(row) for row in result.scalars().all()]

    async def find_by_id(self, task_id: int) -> Task | None:
        row = await self.session.get(TaskTable, task_id)
        return task_row_to_model(row) if row else None

    async def find_by_person(self, person_id: int) -> list[Task]:
        """List the tasks currently owned by a person."""
        result = await self.session.execute(
            select(TaskTable).where(TaskTable.person_id == person_id).order_by(TaskTable.id)
        )
        return [task_row_to_model(row) for row in result.scalars().all()]

    async def save(self, task: Task, person_id: int | None = None) -> Task:
        """
        Insert or replace a task.

        The owner is replaced along with the other fields, so saving an
        existing task without ``person_id`` leaves it unowned.
        """
        row = await merge_task_row(self.session, task)
        row.person = (
            await self.session.get(PersonTable, person_id) if person_id is not None else None
        )
        await self.session.flush()
        return task_row_to_model(row)

    async def delete(self, task: Task) -> None:
        row = await self.session.get(TaskTable, task.id) if task.id is not None else None
        if row is None:
            return
        await self.session.delete(row)
        await self.session.flush()


class PersonRepository:
    """Repository for person operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> list[Person]:
        """List every person with their tasks, unpaginated."""
        result = await self.session.execute(select(PersonTable).order_by(PersonTable.id))
        return [person_row_to_model(row) for row in result.scalars().all()]

    async def find_by_id(self, person_id: int) -> Person | None:
        row = await self.session.get(PersonTable, person_id)
        return person_row_to_model(row) if row else None

    async def save(self, person: Person) -> Person:
        """
        Insert or replace a person.

        The task collection is replaced as a whole: tasks in ``person.tasks``
        are saved and linked, tasks previously owned but no longer listed are
        unlinked and left in place.
        """
        row = await self.session.get(PersonTable, person.id) if person.id is not None else None
        if row is None:
            row = PersonTable()
            self.session.add(row)
        row.name = person.name
        row.tasks = [await merge_task_row(self.session, task) for task in person.tasks]
        await self.session.flush()
        return person_row_to_model(row)

    async def delete(self, person: Person) -> None:
        """Delete a person and, by cascade, the tasks they own."""
        row = await self.session.get(PersonTable, person.id) if person.id is not None else None
        if row is None:
            return
        await self.session.delete(row)
        await self.session.flush()
