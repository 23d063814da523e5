"""REST API router."""

from fastapi import APIRouter, Depends, Response

from taskroster import __version__
from taskroster.api.deps import get_person_controller
from taskroster.api.schemas import HealthResponse, MetricsResponse
from taskroster.controller import PersonController
from taskroster.models import Person, Task
from taskroster.observability.metrics import metrics

router = APIRouter()


# ============================================================================
# Health & Metrics
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/metrics", response_model=MetricsResponse)
async def get_metrics():
    """In-process counters and timings."""
    return MetricsResponse(**metrics.snapshot())


# ============================================================================
# People
# ============================================================================


@router.get("/People", response_model=list[Person])
async def get_people(controller: PersonController = Depends(get_person_controller)):
    """List every person with their tasks."""
    return await controller.get_people()


@router.post("/People", response_model=Person)
async def add_person(
    person: Person,
    controller: PersonController = Depends(get_person_controller),
):
    """Create a person (or replace one, when the body carries a known id)."""
    return await controller.add_person(person)


@router.delete("/People/{person_id}", response_class=Response)
async def remove_person(
    person_id: int,
    controller: PersonController = Depends(get_person_controller),
):
    """Delete a person and their tasks. Unknown ids are ignored."""
    await controller.remove_person(person_id)
    return Response(status_code=200)


# ============================================================================
# Tasks
# ============================================================================


@router.delete("/People/{person_id}/tasks", response_class=Response)
async def remove_person_tasks(
    person_id: int,
    controller: PersonController = Depends(get_person_controller),
):
    """Unlink all of a person's tasks. Unknown ids are ignored."""
    await controller.remove_person_tasks(person_id)
    return Response(status_code=200)


@router.get("/People/{person_id}/tasks", response_model=list[Task])
async def get_person_tasks(
    person_id: int,
    controller: PersonController = Depends(get_person_controller),
):
    """List a person's tasks; empty for unknown ids."""
    return await controller.get_person_tasks(person_id)


@router.post("/People/{person_id}/tasks", response_model=Task)
async def add_person_task(
    person_id: int,
    task: Task,
    controller: PersonController = Depends(get_person_controller),
):
    """Create a task owned by the person (unowned if the person does not exist)."""
    return await controller.add_person_task(person_id, task)


@router.post("/People/{person_id}/task", response_model=Task)
async def add_task(
    person_id: int,
    task: Task,
    controller: PersonController = Depends(get_person_controller),
):
    """Create an unowned task."""
    return await controller.add_task(person_id, task)
