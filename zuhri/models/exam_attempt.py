from sqlalchemy import Column, Integer, DateTime, ForeignKey, Float, Boolean, Enum, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from zuhri.core.database import Base
from zuhri.core.constants import ExamAttemptStatusEnum

class ExamAttempt(Base):
    __tablename__ = "exam_attempts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)
    answers = Column(JSON, nullable=False, default=dict) # question id (str) -> answer
    score = Column(Float, nullable=True)
    total_questions = Column(Integer, nullable=False, default=0)
    correct_answers = Column(Integer, nullable=False, default=0)
    passed = Column(Boolean, nullable=False, default=False)
    status = Column(Enum(ExamAttemptStatusEnum), nullable=False, default=ExamAttemptStatusEnum.IN_PROGRESS)
    started_at = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
    duration = Column(Integer, nullable=True) # Seconds actually taken

    user = relationship("User", back_populates="exam_attempts")
    exam = relationship("Exam", back_populates="attempts")
    certificate = relationship("Certificate", back_populates="exam_attempt", uselist=False)
