from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

WorkStatus = Literal["pending", "working", "finished"]

STATUSES: tuple[str, ...] = ("pending", "working", "finished")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkItem(BaseModel):
    """One row of the team sheet."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: str
    employee_name: str = Field(alias="employeeName", min_length=1)
    work: str = Field(min_length=1)
    status: WorkStatus = "pending"
    observed_at: datetime = Field(default_factory=_utcnow, alias="observedAt")

    @property
    def identity_key(self) -> tuple[str, str, str]:
        return (self.date, self.employee_name, self.work)

    def to_blob(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class PersonSummary(BaseModel):
    name: str
    completed: int = 0
    items: list[WorkItem] = Field(default_factory=list)
    recent: list[WorkItem] = Field(default_factory=list)


class DashboardStats(BaseModel):
    total: int = 0
    pending: int = 0
    working: int = 0
    finished: int = 0
    people: list[PersonSummary] = Field(default_factory=list)


class ChatRequest(BaseModel):
    message: str
    sender: str = "chatbot-user"


class ChatReply(BaseModel):
    ok: bool
    content: str
    sender: Literal["bot"] = "bot"
    timestamp: datetime = Field(default_factory=_utcnow)
