"""Audit record model - one per intercepted controller call."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuditRecord(BaseModel):
    """Captured call identity, arguments and outcome.

    ``result`` holds the return value, or the raised exception when the call
    failed. Values are kept as captured and only rendered at serialization.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    target: str
    method: str
    args: list[Any] = Field(default_factory=list)
    result: Any = None
