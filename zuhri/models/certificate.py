from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from zuhri.core.database import Base

class Certificate(Base):
    __tablename__ = "certificates"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)
    exam_attempt_id = Column(Integer, ForeignKey("exam_attempts.id"), nullable=False, unique=True)
    diploma_template_id = Column(Integer, ForeignKey("diploma_templates.id"), nullable=True)
    certificate_number = Column(String, unique=True, index=True, nullable=False)
    student_name = Column(String(255), nullable=False)
    grade = Column(Float, nullable=False)
    honors = Column(String(100), nullable=True)
    specialization = Column(String(255), nullable=True)
    completion_date = Column(DateTime(timezone=True), nullable=True)
    issued_at = Column(DateTime(timezone=True), server_default=func.now())
    is_valid = Column(Boolean, nullable=False, default=True)

    user = relationship("User", back_populates="certificates")
    course = relationship("Course", back_populates="certificates")
    exam_attempt = relationship("ExamAttempt", back_populates="certificate")
    diploma_template = relationship("DiplomaTemplate")
    images = relationship("CertificateImage", back_populates="certificate", cascade="all, delete-orphan")
