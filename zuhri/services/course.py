import logging
from typing import List
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from zuhri.core.cache import cache
from zuhri.crud.course import course as crud_course
from zuhri.crud.lesson import lesson as crud_lesson
from zuhri.models.course import Course
from zuhri.models.lesson import Lesson
from zuhri.schemas.course import CourseCreate, CourseUpdate
from zuhri.schemas.lesson import LessonCreate, LessonUpdate

logger = logging.getLogger(__name__)

class CourseService:
    def list_courses(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Course]:
        return crud_course.get_active(db, skip=skip, limit=limit)

    def get_course(self, db: Session, course_id: int) -> Course:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")
        return course

    def get_course_for_admin(self, db: Session, course_id: int) -> Course:
        course = crud_course.get_any(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")
        return course

    def list_lessons(self, db: Session, course_id: int) -> List[Lesson]:
        self.get_course(db, course_id)
        return crud_lesson.get_by_course(db, course_id=course_id)

    async def create_course(self, db: Session, *, course_in: CourseCreate) -> Course:
        course = crud_course.create(db, obj_in=course_in, total_lessons=0)
        await cache.invalidate_catalog_cache()
        logger.info(f"Course {course.id} created")
        return course

    async def update_course(self, db: Session, *, course_id: int, course_in: CourseUpdate) -> Course:
        course = self.get_course_for_admin(db, course_id)
        course = crud_course.update(db, db_obj=course, obj_in=course_in)
        await cache.invalidate_catalog_cache()
        return course

    async def delete_course(self, db: Session, *, course_id: int) -> Course:
        course = self.get_course_for_admin(db, course_id)
        course = crud_course.delete(db, id=course.id)
        await cache.invalidate_catalog_cache()
        logger.info(f"Course {course_id} deactivated")
        return course

    async def create_lesson(self, db: Session, *, course_id: int, lesson_in: LessonCreate) -> Lesson:
        course = self.get_course_for_admin(db, course_id)
        lesson = crud_lesson.create(db, obj_in=lesson_in, course_id=course.id, commit=False)
        crud_course.refresh_lesson_count(db, course=course)
        db.commit()
        db.refresh(lesson)
        await cache.invalidate_catalog_cache()
        return lesson

    async def update_lesson(self, db: Session, *, lesson_id: int, lesson_in: LessonUpdate) -> Lesson:
        lesson = crud_lesson.get_any(db, id=lesson_id)
        if not lesson:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found.")
        lesson = crud_lesson.update(db, db_obj=lesson, obj_in=lesson_in, commit=False)
        # Re-activating or deactivating a lesson changes the course total.
        crud_course.refresh_lesson_count(db, course=lesson.course)
        db.commit()
        db.refresh(lesson)
        await cache.invalidate_catalog_cache()
        return lesson

    async def delete_lesson(self, db: Session, *, lesson_id: int) -> Lesson:
        lesson = crud_lesson.get_any(db, id=lesson_id)
        if not lesson:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found.")
        crud_lesson.delete(db, id=lesson.id, commit=False)
        crud_course.refresh_lesson_count(db, course=lesson.course)
        db.commit()
        await cache.invalidate_catalog_cache()
        logger.info(f"Lesson {lesson_id} deactivated")
        return lesson

course_service = CourseService()
