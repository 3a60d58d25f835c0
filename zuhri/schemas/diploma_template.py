from pydantic import Field
from typing import Optional
from datetime import datetime

from zuhri.core.constants import TemplateStyleEnum
from zuhri.schemas.base import CamelModel

HEX_COLOR = r"^#[0-9a-fA-F]{3,8}$"

class DiplomaTemplateBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    level: str = Field(..., min_length=1, max_length=100)
    background_color: str = Field("#ffffff", pattern=HEX_COLOR)
    text_color: str = Field("#000000", pattern=HEX_COLOR)
    border_color: str = Field("#d4af37", pattern=HEX_COLOR)
    logo_url: Optional[str] = Field(None, max_length=500)
    seal_url: Optional[str] = Field(None, max_length=500)
    institution_name: Optional[str] = Field(None, max_length=255)
    template_style: TemplateStyleEnum = TemplateStyleEnum.CLASSIC
    requirements: Optional[str] = None

class DiplomaTemplateCreate(DiplomaTemplateBase):
    pass

class DiplomaTemplateUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    level: Optional[str] = Field(None, min_length=1, max_length=100)
    background_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    text_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    border_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    logo_url: Optional[str] = Field(None, max_length=500)
    seal_url: Optional[str] = Field(None, max_length=500)
    institution_name: Optional[str] = Field(None, max_length=255)
    template_style: Optional[TemplateStyleEnum] = None
    requirements: Optional[str] = None
    is_active: Optional[bool] = None

class DiplomaTemplate(CamelModel):
    id: int
    title: str
    level: str
    background_color: str
    text_color: str
    border_color: str
    logo_url: Optional[str] = None
    seal_url: Optional[str] = None
    institution_name: str
    template_style: str
    requirements: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class DiplomaLevel(CamelModel):
    key: str
    level: str
    title: str
    certificate_type: str
    hours: int
    background_color: str
    text_color: str
    border_color: str
    template_style: str
