from pydantic import ConfigDict, Field
from typing import Optional
from datetime import datetime

from zuhri.core.constants import CourseLevelEnum
from zuhri.schemas.base import CamelModel

class CourseBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    instructor: str = Field(..., min_length=1, max_length=100)
    level: CourseLevelEnum
    duration: int = Field(..., ge=1, le=10080, description="Duration in minutes")
    thumbnail_url: Optional[str] = None
    image_url: Optional[str] = None
    syllabus_url: Optional[str] = None
    syllabus_file_name: Optional[str] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "title": "علوم الحديث",
            "description": "مدخل إلى مصطلح الحديث",
            "instructor": "د. أحمد",
            "level": "تمهيدي",
            "duration": 600
        }
    })

class CourseCreate(CourseBase):
    pass

class CourseUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    instructor: Optional[str] = Field(None, min_length=1, max_length=100)
    level: Optional[CourseLevelEnum] = None
    duration: Optional[int] = Field(None, ge=1, le=10080)
    thumbnail_url: Optional[str] = None
    image_url: Optional[str] = None
    syllabus_url: Optional[str] = None
    syllabus_file_name: Optional[str] = None
    is_active: Optional[bool] = None

class Course(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    instructor: str
    level: str
    duration: Optional[int] = None
    total_lessons: int = 0
    thumbnail_url: Optional[str] = None
    image_url: Optional[str] = None
    syllabus_url: Optional[str] = None
    syllabus_file_name: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
