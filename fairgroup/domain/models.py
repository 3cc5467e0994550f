# fairgroup/domain/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime


class StudentDTO(BaseModel):
    name: str = Field(..., min_length=1)
    grade: float


class GroupResultDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    group_number: int = Field(..., alias="groupNumber")
    average_grade: float = Field(..., alias="averageGrade")
    students: List[StudentDTO] = Field(default_factory=list)


class RosterDTO(BaseModel):
    id: int
    label: Optional[str] = None
    created_at: Optional[datetime] = None
    students: List[StudentDTO] = Field(default_factory=list)


class AddStudentsResultDTO(BaseModel):
    added: int
    skipped: int
    size: int
