from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional, Union

Priority = Literal["P1", "P2", "P3", "P4"]
PRIORITIES = ("P1", "P2", "P3", "P4")
DEFAULT_PRIORITY = "P3"


class TaskRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    assignee: str = ""
    # Phrase ("Wednesday", "Tonight") or ISO instant with the fixed offset
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    priority: Priority = DEFAULT_PRIORITY
    original_due: str = Field(default="", alias="originalDue")


class ParseRequest(BaseModel):
    taskText: Optional[str] = None


class TranscriptRequest(BaseModel):
    transcript: Optional[str] = None


class ExtractionResult(BaseModel):
    success: bool
    data: Union[TaskRecord, list[TaskRecord], None] = None
    error: Optional[str] = None
