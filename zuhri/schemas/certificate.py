from pydantic import Field
from typing import Any, Dict, Optional
from datetime import datetime

from zuhri.schemas.base import CamelModel

class Certificate(CamelModel):
    id: int
    user_id: int
    course_id: int
    exam_attempt_id: int
    diploma_template_id: Optional[int] = None
    certificate_number: str
    student_name: str
    grade: float
    honors: Optional[str] = None
    specialization: Optional[str] = None
    completion_date: Optional[datetime] = None
    issued_at: Optional[datetime] = None
    is_valid: bool = True

class CertificateWithCourse(Certificate):
    course_title: Optional[str] = None
    course_level: Optional[str] = None

class CertificateVerification(CamelModel):
    certificate_number: str
    is_valid: bool
    student_name: Optional[str] = None
    course_title: Optional[str] = None
    grade: Optional[float] = None
    issued_at: Optional[datetime] = None

class CertificateGenerateRequest(CamelModel):
    certificate_id: int
    template_id: int
    canvas_data: Optional[str] = Field(None, description="Client-rendered PNG as a base64 data URL")
    certificate_data: Optional[Dict[str, Any]] = None

class CertificateImage(CamelModel):
    id: int
    certificate_id: int
    template_id: Optional[int] = None
    image_url: str
    generated_at: Optional[datetime] = None
    generated_by: int
    meta: Optional[Dict[str, Any]] = Field(None, serialization_alias="metadata")

class GeneratedImage(CamelModel):
    image_id: int
    image_url: str
