from pydantic import Field, field_validator, model_validator
from typing import Optional, List

from zuhri.schemas.base import CamelModel

def clean_options(options: List[str]) -> List[str]:
    cleaned = [option.strip() for option in options]
    if any(not option for option in cleaned):
        raise ValueError("Options cannot be empty.")
    if len(set(cleaned)) != len(cleaned):
        raise ValueError("Options must be unique.")
    return cleaned

class ExamQuestionBase(CamelModel):
    question: str = Field(..., min_length=1, max_length=500)
    options: List[str] = Field(..., min_length=2, max_length=6)
    correct_answer: str = Field(..., min_length=1)
    order: Optional[int] = Field(None, ge=1)
    points: float = Field(1.0, ge=0.1, le=10)

    @field_validator("options")
    @classmethod
    def validate_options(cls, v):
        return clean_options(v)

    @model_validator(mode="after")
    def correct_answer_in_options(self):
        if self.correct_answer.strip() not in self.options:
            raise ValueError("The correct answer must be one of the options.")
        self.correct_answer = self.correct_answer.strip()
        return self

class ExamQuestionCreate(ExamQuestionBase):
    pass

class ExamQuestionUpdate(CamelModel):
    question: Optional[str] = Field(None, min_length=1, max_length=500)
    options: Optional[List[str]] = Field(None, min_length=2, max_length=6)
    correct_answer: Optional[str] = Field(None, min_length=1)
    order: Optional[int] = Field(None, ge=1)
    points: Optional[float] = Field(None, ge=0.1, le=10)

    @field_validator("options")
    @classmethod
    def validate_options(cls, v):
        if v is None:
            return v
        return clean_options(v)

class ExamQuestionPublic(CamelModel):
    id: int
    exam_id: int
    question: str
    options: List[str]
    order: int
    points: float

class ExamQuestion(ExamQuestionPublic):
    correct_answer: str
