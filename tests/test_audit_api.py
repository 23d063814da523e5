"""
Audit side-channel tests through the HTTP surface.
"""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from taskroster.api.deps import get_person_controller
from taskroster.controller import PersonController
from taskroster.db.repositories import TaskRepository

CONTROLLER = "taskroster.controller.PersonController"


class BrokenPersonRepository:
    """Stands in for a store that is down."""

    async def find_all(self):
        raise RuntimeError("store unavailable")


@pytest.mark.asyncio
async def test_each_call_dispatches_one_record(client, audit_sink, drain_audit):
    """Every controller call ships exactly one audit record."""
    await client.post("/People", json={"name": "Alice"})
    await client.post("/People/1/tasks", json={"name": "Write spec"})
    await client.get("/People/1/tasks")
    await client.delete("/People/1/tasks")
    await client.delete("/People/5")
    await drain_audit()

    records = [json.loads(p) for p in audit_sink.payloads]
    assert [r["method"] for r in records] == [
        "add_person",
        "add_person_task",
        "get_person_tasks",
        "remove_person_tasks",
        "remove_person",
    ]
    assert all(r["target"] == CONTROLLER for r in records)

    add_person, add_task, get_tasks, clear, remove = records
    assert add_person["args"] == [{"id": None, "name": "Alice", "tasks": []}]
    assert add_person["result"] == {"id": 1, "name": "Alice", "tasks": []}
    assert add_task["args"][0] == 1
    assert add_task["args"][1]["name"] == "Write spec"
    assert add_task["result"]["id"] == 1
    assert get_tasks["result"][0]["name"] == "Write spec"
    assert clear["args"] == [1]
    assert clear["result"] is None
    assert remove["args"] == [5]


@pytest.mark.asyncio
async def test_sink_failure_does_not_change_response(client, audit_sink, drain_audit):
    """The caller sees the same response whether or not the audit send works."""
    ok = await client.post("/People", json={"name": "Alice"})
    ok_list = await client.get("/People")

    audit_sink.fail = True
    failing = await client.post("/People", json={"id": 1, "name": "Alice"})
    failing_list = await client.get("/People")
    await drain_audit()

    assert failing.status_code == ok.status_code == 200
    assert failing.content == ok.content
    assert failing_list.content == ok_list.content
    assert len(audit_sink.payloads) == 4


@pytest.mark.asyncio
async def test_handler_error_is_propagated_and_audited(engine, audit_sink, drain_audit):
    """A store failure reaches the HTTP layer unchanged and is recorded as the result."""
    from taskroster.main import app

    async def broken_controller():
        return PersonController(BrokenPersonRepository(), TaskRepository(None))

    app.dependency_overrides[get_person_controller] = broken_controller
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/People")
    finally:
        app.dependency_overrides.clear()
    await drain_audit()

    assert response.status_code == 500
    (record,) = [json.loads(p) for p in audit_sink.payloads]
    assert record["method"] == "get_people"
    assert record["args"] == []
    assert record["result"]["type"] == "RuntimeError"
    assert record["result"]["message"] == "store unavailable"
