import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-zuhri-learning")
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("LOG_DIR", "./test-logs")
os.environ.setdefault("CERTIFICATE_STORAGE_DIR", "./test-storage/certificates")

import shutil
import uuid
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from zuhri.core.config import settings
from zuhri.core.constants import RoleEnum, CourseLevelEnum
from zuhri.core.database import Base, get_db
from zuhri.crud.user import user as crud_user
from zuhri.models.course import Course
from zuhri.models.lesson import Lesson
from zuhri.models.exam import Exam
from zuhri.models.exam_question import ExamQuestion
from zuhri.models.enrollment import Enrollment
from zuhri.models.lesson_progress import LessonProgress
from zuhri.schemas.user import UserCreate
from zuhri.utils import deps as deps_utils
from zuhri.utils.dates import utcnow
import main

test_db_url = settings.TEST_DATABASE_URL or "sqlite:///./test.db"

DEFAULT_PASSWORD = "testpass123"

@pytest.fixture(scope="session")
def database_engine():
    if test_db_url.startswith("sqlite"):
        engine = create_engine(test_db_url, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(test_db_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()
    if test_db_url.startswith("sqlite") and os.path.exists("./test.db"):
        os.remove("./test.db")
    shutil.rmtree(settings.CERTIFICATE_STORAGE_DIR, ignore_errors=True)

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture(scope="function")
def client(db_session):
    # Re-initialize the app for each test function to ensure a clean state
    from importlib import reload
    reload(main)
    main.app.dependency_overrides[get_db] = lambda: db_session
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    main.app.dependency_overrides[deps_utils.get_transactional_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client

@pytest.fixture
def user_factory(db_session):
    def _user_factory(role: RoleEnum = RoleEnum.STUDENT, email: str = None, password: str = DEFAULT_PASSWORD, **fields):
        user_in = UserCreate(
            email=email or f"{role.value}-{uuid.uuid4().hex[:10]}@test.com",
            password=password,
            first_name=fields.pop("first_name", "محمد"),
            last_name=fields.pop("last_name", "الحسن"),
        )
        return crud_user.create_with_password(db_session, obj_in=user_in, role=role, **fields)
    return _user_factory

@pytest.fixture
def login(client):
    def _login(email: str, password: str = DEFAULT_PASSWORD) -> str:
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        body = response.json()
        token = (body.get("data") or {}).get("token", {}).get("access_token")
        assert token, f"Login failed or token missing: {body}"
        # Requests in tests authenticate with explicit headers only.
        client.cookies.clear()
        return token
    return _login

@pytest.fixture
def auth_user(user_factory, login):
    """Create a user of ``role`` and return it with ready-to-use auth headers."""
    def _auth_user(role: RoleEnum = RoleEnum.STUDENT, **fields):
        test_user = user_factory(role=role, **fields)
        token = login(test_user.email)
        return test_user, {"Authorization": f"Bearer {token}"}
    return _auth_user

@pytest.fixture
def token_for_role(auth_user):
    def _create_token_for_role(role_name: str) -> str:
        _, headers = auth_user(RoleEnum(role_name))
        return headers["Authorization"].split(" ", 1)[1]
    return _create_token_for_role

@pytest.fixture
def course_factory(db_session):
    """Course with ``lesson_durations`` lessons (seconds each) and optionally an exam.

    Questions are ``(question, options, correct_answer)`` tuples.
    """
    def _course_factory(
        lesson_durations=(600, 900),
        level: str = CourseLevelEnum.PREPARATORY.value,
        questions=None,
        exam_duration: int = 30,
        passing_grade: float = 70,
        title: str = None,
    ):
        course = Course(
            title=title or f"مصطلح الحديث {uuid.uuid4().hex[:6]}",
            description="مدخل إلى علوم الحديث",
            instructor="د. أحمد",
            level=level,
            duration=600,
            total_lessons=len(lesson_durations),
            is_active=True,
        )
        db_session.add(course)
        db_session.flush()

        lessons = []
        for index, duration in enumerate(lesson_durations, start=1):
            lesson = Lesson(
                course_id=course.id,
                title=f"الدرس {index}",
                video_url=f"https://www.youtube.com/watch?v=lesson{index}",
                duration=duration,
                order=index,
                is_active=True,
            )
            db_session.add(lesson)
            lessons.append(lesson)

        exam = None
        exam_questions = []
        if questions is not None:
            exam = Exam(
                course_id=course.id,
                title="الاختبار النهائي",
                duration=exam_duration,
                passing_grade=passing_grade,
                total_questions=len(questions),
                is_active=True,
            )
            db_session.add(exam)
            db_session.flush()
            for index, (text, options, correct) in enumerate(questions, start=1):
                question = ExamQuestion(
                    exam_id=exam.id, question=text, options=list(options), correct_answer=correct, order=index, points=1.0
                )
                db_session.add(question)
                exam_questions.append(question)

        db_session.commit()
        return course, lessons, exam, exam_questions
    return _course_factory

@pytest.fixture
def complete_lessons(db_session):
    """Enroll ``user`` and mark every lesson finished, bypassing the progress endpoint."""
    def _complete_lessons(user, course, lessons):
        enrollment = Enrollment(user_id=user.id, course_id=course.id, progress=100.0, completed_at=utcnow())
        db_session.add(enrollment)
        for lesson in lessons:
            db_session.add(LessonProgress(
                user_id=user.id,
                lesson_id=lesson.id,
                course_id=course.id,
                watched_duration=lesson.duration or 0,
                is_completed=True,
                completed_at=utcnow(),
            ))
        db_session.commit()
        return enrollment
    return _complete_lessons

SAMPLE_QUESTIONS = [
    ("ما تعريف الحديث الصحيح؟", ["ما اتصل سنده بنقل العدل الضابط", "ما رواه الضعيف", "ما انقطع سنده"], "ما اتصل سنده بنقل العدل الضابط"),
    ("من صاحب الصحيح؟", ["البخاري", "الترمذي", "النسائي"], "البخاري"),
    ("كم شروط الصحيح؟", ["ثلاثة", "خمسة", "سبعة"], "خمسة"),
    ("ما المرسل؟", ["ما سقط منه الصحابي", "ما سقط من آخره بعد التابعي", "ما رواه الثقة"], "ما سقط من آخره بعد التابعي"),
]

@pytest.fixture
def sample_questions():
    return list(SAMPLE_QUESTIONS)
