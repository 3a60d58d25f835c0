from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from zuhri.core.database import Base

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    instructor = Column(String, nullable=False)
    level = Column(String, nullable=False)
    duration = Column(Integer, nullable=True) # Duration in minutes
    total_lessons = Column(Integer, nullable=False, default=0)
    thumbnail_url = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    syllabus_url = Column(String, nullable=True)
    syllabus_file_name = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    lessons = relationship(
        "Lesson",
        primaryjoin="and_(Course.id == Lesson.course_id, Lesson.is_active == True)",
        order_by="Lesson.order",
        viewonly=True,
    )
    enrollments = relationship("Enrollment", back_populates="course")
    exams = relationship("Exam", back_populates="course", cascade="all, delete-orphan")
    certificates = relationship("Certificate", back_populates="course")
