"""Person controller - request handling over the repositories.

Missing ids are never an error: deletes and updates become no-ops, reads
come back empty.
"""

from taskroster.audit import audited
from taskroster.db.repositories import PersonRepository, TaskRepository
from taskroster.models import Person, Task


class PersonController:
    """Maps person/task operations straight onto repository calls."""

    def __init__(self, person_repository: PersonRepository, task_repository: TaskRepository):
        self.person_repository = person_repository
        self.task_repository = task_repository

    @audited
    async def get_people(self) -> list[Person]:
        return await self.person_repository.find_all()

    @audited
    async def add_person(self, person: Person) -> Person:
        return await self.person_repository.save(person)

    @audited
    async def remove_person(self, person_id: int) -> None:
        person = await self.person_repository.find_by_id(person_id)
        if person is not None:
            await self.person_repository.delete(person)

    @audited
    async def remove_person_tasks(self, person_id: int) -> None:
        """Empty a person's task list; the tasks themselves stay, unowned."""
        person = await self.person_repository.find_by_id(person_id)
        if person is not None:
            await self.person_repository.save(person.model_copy(update={"tasks": []}))

    @audited
    async def get_person_tasks(self, person_id: int) -> list[Task]:
        person = await self.person_repository.find_by_id(person_id)
        return (person or Person()).tasks

    @audited
    async def add_person_task(self, person_id: int, task: Task) -> Task:
        """Save a task owned by ``person_id``, or unowned if there is no such person."""
        person = await self.person_repository.find_by_id(person_id)
        return await self.task_repository.save(task, person_id=person.id if person else None)

    @audited
    async def add_task(self, person_id: int, task: Task) -> Task:
        # person_id is part of the route only
        return await self.task_repository.save(task)
