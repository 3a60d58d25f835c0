from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.sql import func
from zuhri.core.database import Base
from zuhri.core.config import settings

class DiplomaTemplate(Base):
    __tablename__ = "diploma_templates"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    level = Column(String(100), nullable=False, index=True)
    background_color = Column(String(50), default="#ffffff")
    text_color = Column(String(50), default="#000000")
    border_color = Column(String(50), default="#d4af37")
    logo_url = Column(String(500), nullable=True)
    seal_url = Column(String(500), nullable=True)
    institution_name = Column(String(255), nullable=False, default=settings.INSTITUTION_NAME)
    template_style = Column(String(50), default="classic")
    requirements = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
