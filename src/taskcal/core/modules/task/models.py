import datetime as dt
import re
from typing import Annotated, Any, Self

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from taskcal.core.db import JsonModel
from taskcal.utils import is_month

DEFAULT_STATUS = "pendiente"
TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


def _blank_to_none(value: Any) -> Any:
    # HTML forms submit empty inputs as ""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


def _check_time(value: str | None) -> str | None:
    if value is not None and not TIME_RE.fullmatch(value):
        raise ValueError("time must be HH:MM")
    return value


OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
Description = Annotated[str, BeforeValidator(_none_to_empty)]
TimeOfDay = Annotated[str | None, BeforeValidator(_blank_to_none), AfterValidator(_check_time)]

# Older clients sent Spanish keys
SUBJECT_ALIASES = AliasChoices("subject", "materia")
PROFESSOR_ALIASES = AliasChoices("professor", "profesor")
TIME_ALIASES = AliasChoices("time", "hora")


class Task(JsonModel):
    """Dated task owned by a single user."""

    id: str
    name: str
    description: Description = ""
    subject: OptionalText = Field(default=None, validation_alias=SUBJECT_ALIASES)
    professor: OptionalText = Field(default=None, validation_alias=PROFESSOR_ALIASES)
    date: dt.date
    time: OptionalText = Field(default=None, validation_alias=TIME_ALIASES)  # Not checked, legacy files vary
    status: str = DEFAULT_STATUS  # Free-form, chosen by the client
    owner: str


class TaskDraft(BaseModel):
    """Payload for creating a task. Any owner field sent by the client is ignored."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "name": "Homework",
                    "subject": "Math",
                    "date": "2024-05-01",
                    "time": "10:30",
                    "status": "pendiente",
                }
            ]
        },
    )

    id: OptionalText = Field(default=None, description="Client-generated id; assigned by the server when omitted")
    name: str = Field(..., min_length=1, description="Task name")
    description: Description = Field(default="", description="Free text details")
    subject: OptionalText = Field(default=None, validation_alias=SUBJECT_ALIASES, description="Course or subject")
    professor: OptionalText = Field(default=None, validation_alias=PROFESSOR_ALIASES, description="Professor")
    date: dt.date = Field(..., description="Calendar day, YYYY-MM-DD")
    time: TimeOfDay = Field(default=None, validation_alias=TIME_ALIASES, description="Time of day, HH:MM")
    status: str = Field(default=DEFAULT_STATUS, min_length=1, description="Status, e.g. pendiente or completado")


class TaskPatch(BaseModel):
    """Partial task update. Only fields present in the payload are applied; id and owner are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = Field(default=None, min_length=1)
    description: Description = ""
    subject: OptionalText = Field(default=None, validation_alias=SUBJECT_ALIASES)
    professor: OptionalText = Field(default=None, validation_alias=PROFESSOR_ALIASES)
    date: dt.date | None = None
    time: TimeOfDay = Field(default=None, validation_alias=TIME_ALIASES)
    status: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> Self:
        for field in ("name", "date", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"'{field}' cannot be null")
        return self

    def apply(self, task: Task) -> Task:
        return task.model_copy(update=self.model_dump(exclude_unset=True))


class TaskFilter(BaseModel):
    """Optional listing filters, all combined with AND."""

    q: str | None = None  # Case-insensitive match on name or subject
    status: str | None = None
    date: dt.date | None = None
    month: str | None = None  # YYYY-MM

    @field_validator("month")
    @classmethod
    def _check_month(cls, value: str | None) -> str | None:
        if value is not None and not is_month(value):
            raise ValueError("month must be YYYY-MM")
        return value

    def matches(self, task: Task) -> bool:
        if self.q:
            needle = self.q.lower()
            if needle not in task.name.lower() and needle not in (task.subject or "").lower():
                return False
        if self.status and task.status != self.status:
            return False
        if self.date and task.date != self.date:
            return False
        return not (self.month and task.date.strftime("%Y-%m") != self.month)
