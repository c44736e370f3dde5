import math
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.catalog import SubjectCatalog, default_catalog
from src.grading import LETTER_GRADES, STATUSES, coerce_mark


def _clean_mark(value) -> Union[int, float]:
    mark = coerce_mark(value)
    if isinstance(value, int) and not isinstance(value, bool) and mark.is_integer():
        return int(mark)
    return mark


class StudentRecord(BaseModel):
    """
    One student's result for a single (branch, semester).
    cgpa / grade / status are cached copies of compute_result(marks) and are
    reset to None when the stored value is not usable.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    roll_no: str = Field(alias="rollNo")
    branch: str
    semester: str
    marks: List[Union[int, float]] = Field(default_factory=list)
    cgpa: Optional[float] = None
    grade: Optional[str] = None
    status: Optional[str] = None

    @field_validator("id", "name", "roll_no", "branch", "semester", mode="before")
    @classmethod
    def _numbers_as_text(cls, v):
        # semester comes back as a number from older saves
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(int(v)) if float(v).is_integer() else str(v)
        return v

    @field_validator("marks", mode="before")
    @classmethod
    def _clamp_marks(cls, v):
        if not isinstance(v, list):
            raise ValueError("marks must be a list")
        return [_clean_mark(m) for m in v]

    @field_validator("cgpa", mode="before")
    @classmethod
    def _usable_cgpa(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
            return None
        return v

    @field_validator("grade", mode="before")
    @classmethod
    def _known_grade(cls, v):
        return v if v in LETTER_GRADES else None

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, v):
        return v if v in STATUSES else None


class StoreDocument(BaseModel):
    students: List[StudentRecord] = Field(default_factory=list)
    subjects: SubjectCatalog = Field(default_factory=default_catalog)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class StudentForm(BaseModel):
    """Cleaned input of the add/edit student form."""
    name: str
    roll_no: str
    branch: str
    semester: str
    marks: List[Union[int, float]]
