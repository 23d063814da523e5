"""
Audit record serialization tests.
"""

import json
from datetime import datetime
from decimal import Decimal
from enum import Enum

import pytest

from taskroster.audit import to_json
from taskroster.db.tables import TaskTable
from taskroster.errors import AuditSerializationError
from taskroster.models import AuditRecord, Person, Task


class Color(Enum):
    RED = "red"


class Account:
    def __init__(self):
        self.owner = "alice"
        self._balance = Decimal("10.50")
        self.__pin = 1234


class Empty:
    pass


class Slotted:
    __slots__ = ("x", "_y")

    def __init__(self):
        self.x = 1
        self._y = 2


def _render(*args, result=None):
    return json.loads(to_json(AuditRecord(target="t.Target", method="m", args=list(args), result=result)))


def test_private_fields_are_visible():
    (account,) = _render(Account())["args"]
    assert account == {"owner": "alice", "_balance": "10.50", "_Account__pin": 1234}


def test_empty_objects_render_as_empty_mapping():
    assert _render(Empty(), object())["args"] == [{}, {}]


def test_slotted_objects():
    assert _render(Slotted())["args"] == [{"x": 1, "_y": 2}]


def test_models_use_wire_shape():
    person = Person(id=1, name="Alice", tasks=[Task(id=2, name="Plan", start_date=datetime(2024, 1, 2))])

    (rendered,) = _render(person)["args"]

    assert rendered["tasks"][0]["startDate"] == "2024-01-02T00:00:00"
    assert "person" not in rendered["tasks"][0]


def test_orm_rows_render_loaded_columns():
    row = TaskTable(name="Plan", description="first")

    (rendered,) = _render(row)["args"]

    assert rendered["name"] == "Plan"
    assert rendered["description"] == "first"
    assert "person" not in rendered


def test_exception_result():
    error = KeyError("missing")
    error.code = "E42"

    result = _render(result=error)["result"]

    assert result["type"] == "KeyError"
    assert result["args"] == ["missing"]
    assert result["code"] == "E42"


def test_scalars():
    rendered = _render(datetime(2024, 5, 1, 12, 30), Color.RED, {1, 1}, (1, 2), b"hi")
    assert rendered["args"] == ["2024-05-01T12:30:00", "red", [1], [1, 2], "aGk="]


def test_circular_structure_raises():
    looped: list = []
    looped.append(looped)

    with pytest.raises(AuditSerializationError) as excinfo:
        to_json(AuditRecord(target="t", method="m", args=[looped]))

    assert excinfo.value.code == "AUDIT_SERIALIZATION"


def test_unsupported_keys_raise():
    with pytest.raises(AuditSerializationError):
        to_json(AuditRecord(target="t", method="m", args=[{("a", "b"): 1}]))


def test_exception_attributes_do_not_mask_computed_fields():
    error = ValueError("real message")
    error.message = "override"
    error.type = "Spoofed"
    error.args = ("kept",)

    result = _render(result=error)["result"]

    assert result["type"] == "ValueError"
    assert result["message"] == "kept"
    assert result["args"] == ["kept"]


def test_failing_message_raises_serialization_error():
    class Unprintable(Exception):
        def __str__(self):
            raise KeyError("message")

    with pytest.raises(AuditSerializationError) as excinfo:
        to_json(AuditRecord(target="t", method="m", args=[], result=Unprintable()))

    assert isinstance(excinfo.value.__cause__, KeyError)
