from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from zuhri.core.database import Base
from zuhri.core.constants import DEFAULT_PASSING_GRADE

class Exam(Base):
    __tablename__ = "exams"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=False) # Duration in minutes
    passing_grade = Column(Float, nullable=False, default=DEFAULT_PASSING_GRADE)
    total_questions = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    course = relationship("Course", back_populates="exams")
    questions = relationship(
        "ExamQuestion",
        back_populates="exam",
        order_by="ExamQuestion.order",
        cascade="all, delete-orphan",
    )
    attempts = relationship("ExamAttempt", back_populates="exam", cascade="all, delete-orphan")
