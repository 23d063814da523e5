"""Person and task view models.

Tasks never carry their owner on the wire: a person embeds its tasks and the
back reference stays in the database.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Task(BaseModel):
    """A unit of work, optionally owned by a person."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = Field(None, description="ISO-8601 or epoch timestamp")
    end_date: Optional[datetime] = Field(None, description="ISO-8601 or epoch timestamp")


class Person(BaseModel):
    """A person and the tasks they own."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[int] = None
    name: Optional[str] = None
    tasks: list[Task] = Field(default_factory=list)
