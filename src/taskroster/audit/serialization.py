"""JSON rendering for audit records.

Every field of a captured value is visible, not just its public surface:
private attributes are included, and an object exposing no state at all
renders as ``{}`` instead of failing.
"""

import base64
import dataclasses
import json
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import DeclarativeBase

from taskroster.errors import AuditSerializationError
from taskroster.models import AuditRecord


def _qualified_name(cls: type) -> str:
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _slot_fields(obj: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for cls in type(obj).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in fields:
                continue
            if hasattr(obj, name):
                fields[name] = getattr(obj, name)
    return fields


def _encode(obj: Any) -> Any:
    """``json.dumps`` default hook."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if isinstance(obj, DeclarativeBase):
        # Loaded column values only; never trigger a lazy load from here
        state = sa_inspect(obj)
        return {
            attr.key: state.dict[attr.key]
            for attr in state.mapper.column_attrs
            if attr.key in state.dict
        }
    if isinstance(obj, BaseException):
        return {
            **vars(obj),
            "type": _qualified_name(type(obj)),
            "message": str(obj),
            "args": list(obj.args),
        }
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    if isinstance(obj, timedelta):
        return obj.total_seconds()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (Decimal, UUID)):
        return str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(obj).decode("ascii")
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}
    if hasattr(obj, "__dict__"):
        return {**_slot_fields(obj), **vars(obj)}
    return _slot_fields(obj)


def to_json(record: AuditRecord) -> str:
    """Render an audit record, raising AuditSerializationError on any rendering failure."""
    data = {
        "target": record.target,
        "method": record.method,
        "args": record.args,
        "result": record.result,
    }
    try:
        return json.dumps(data, default=_encode)
    except Exception as e:
        raise AuditSerializationError(f"{type(e).__name__}: {e!r}") from e
