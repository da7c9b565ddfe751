from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from models.event import ErrorEvent


class ClassifiedError(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: ErrorEvent
    category: Optional[str] = None      # None = matched no known pattern


class VariableCount(BaseModel):
    variable: str
    count: int


class EditorAdoption(BaseModel):
    used_editor: int
    total: int

    @property
    def rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.used_editor / self.total


class StatsReport(BaseModel):
    error_count: int
    error_types: dict[str, int] = Field(default_factory=dict)
    variables_with_no_value: list[VariableCount] = Field(default_factory=list)
    editor_adoption: EditorAdoption
    editor_adoption_rate: float
