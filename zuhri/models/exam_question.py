from sqlalchemy import Column, Integer, String, Text, ForeignKey, Float, JSON
from sqlalchemy.orm import relationship
from zuhri.core.database import Base

class ExamQuestion(Base):
    __tablename__ = "exam_questions"

    id = Column(Integer, primary_key=True, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    options = Column(JSON, nullable=False) # Ordered list of option strings
    correct_answer = Column(String, nullable=False)
    order = Column(Integer, nullable=False)
    points = Column(Float, nullable=False, default=1.0)

    exam = relationship("Exam", back_populates="questions")
