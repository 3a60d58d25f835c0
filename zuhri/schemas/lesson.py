from pydantic import Field
from typing import Optional
from datetime import datetime

from zuhri.schemas.base import CamelModel

class LessonBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    video_url: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0, description="Duration in seconds")
    order: int = Field(..., ge=1)

class LessonCreate(LessonBase):
    pass

class LessonUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    video_url: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    order: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None

class Lesson(LessonBase):
    id: int
    course_id: int
    is_active: bool = True
    created_at: Optional[datetime] = None
