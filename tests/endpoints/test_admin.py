import pytest

from zuhri.core.constants import RoleEnum, CourseLevelEnum
from zuhri.schemas.course import Course
from zuhri.schemas.exam import Exam
from zuhri.schemas.exam_question import ExamQuestion
from zuhri.schemas.lesson import Lesson
from zuhri.schemas.stats import AdminStats
from tests.helpers.asserts import api_call, assert_error

COURSE_PAYLOAD = {
    "title": "علوم الحديث",
    "description": "مدخل إلى مصطلح الحديث",
    "instructor": "د. أحمد",
    "level": CourseLevelEnum.PREPARATORY.value,
    "duration": 600,
}

STUDENT_FORBIDDEN = [
    ("GET", "/api/admin/dashboard"),
    ("POST", "/api/admin/courses"),
    ("PATCH", "/api/admin/courses/1"),
    ("DELETE", "/api/admin/courses/1"),
    ("POST", "/api/admin/courses/1/lessons"),
    ("POST", "/api/admin/courses/1/exams"),
    ("GET", "/api/admin/exams/1/questions"),
    ("DELETE", "/api/admin/questions/1"),
    ("GET", "/api/admin/diploma-templates"),
]


@pytest.mark.parametrize("method,path", STUDENT_FORBIDDEN, ids=[f"{m} {p}" for m, p in STUDENT_FORBIDDEN])
def test_students_cannot_use_admin_endpoints(client, token_for_role, method, path):
    headers = {"Authorization": f"Bearer {token_for_role('student')}"}
    response = client.request(method, path, headers=headers, json=COURSE_PAYLOAD)
    assert_error(response, 403, "FORBIDDEN")


def test_admin_dashboard(client, auth_user, course_factory):
    course_factory()
    _, headers = auth_user(RoleEnum.ADMIN)
    response = api_call(client, "GET", "/api/admin/dashboard", headers=headers, schema=AdminStats)
    data = response.json()["data"]
    assert data["totalUsers"] >= 1
    assert data["totalCourses"] >= 1


def test_course_and_lesson_management(client, auth_user):
    _, headers = auth_user(RoleEnum.ADMIN)

    response = api_call(client, "POST", "/api/admin/courses", headers=headers, json=COURSE_PAYLOAD, schema=Course)
    course = response.json()["data"]
    assert course["totalLessons"] == 0

    bad = dict(COURSE_PAYLOAD, level="unknown-level")
    assert_error(client.post("/api/admin/courses", headers=headers, json=bad), 422, "VALIDATION_ERROR")

    response = api_call(client, "PATCH", f"/api/admin/courses/{course['id']}", headers=headers,
                        json={"title": "مصطلح الحديث"}, schema=Course)
    assert response.json()["data"]["title"] == "مصطلح الحديث"

    lesson_ids = []
    for order, duration in enumerate((600, 1200), start=1):
        response = api_call(client, "POST", f"/api/admin/courses/{course['id']}/lessons", headers=headers, json={
            "title": f"الدرس {order}", "videoUrl": "https://www.youtube.com/watch?v=abc", "duration": duration, "order": order,
        }, schema=Lesson)
        lesson_ids.append(response.json()["data"]["id"])

    response = api_call(client, "GET", f"/api/courses/{course['id']}", schema=Course)
    assert response.json()["data"]["totalLessons"] == 2

    response = api_call(client, "PATCH", f"/api/admin/lessons/{lesson_ids[0]}", headers=headers,
                        json={"duration": 900}, schema=Lesson)
    assert response.json()["data"]["duration"] == 900

    api_call(client, "DELETE", f"/api/admin/lessons/{lesson_ids[1]}", headers=headers)
    response = api_call(client, "GET", f"/api/courses/{course['id']}/lessons")
    assert [l["id"] for l in response.json()["data"]] == [lesson_ids[0]]
    response = api_call(client, "GET", f"/api/courses/{course['id']}")
    assert response.json()["data"]["totalLessons"] == 1

    response = api_call(client, "DELETE", f"/api/admin/courses/{course['id']}", headers=headers)
    assert response.json()["data"]["isActive"] is False
    assert_error(client.get(f"/api/courses/{course['id']}"), 404, "NOT_FOUND")


def test_exam_and_question_management(client, auth_user, course_factory):
    course, _, _, _ = course_factory()
    _, headers = auth_user(RoleEnum.ADMIN)

    response = api_call(client, "POST", f"/api/admin/courses/{course.id}/exams", headers=headers, json={
        "title": "الاختبار النهائي", "duration": 30, "passingGrade": 60,
    }, schema=Exam)
    exam = response.json()["data"]
    assert exam["totalQuestions"] == 0
    assert exam["passingGrade"] == 60

    invalid = {"question": "من صاحب الصحيح؟", "options": ["البخاري", "مسلم"], "correctAnswer": "الترمذي"}
    assert_error(client.post(f"/api/admin/exams/{exam['id']}/questions", headers=headers, json=invalid), 422, "VALIDATION_ERROR")
    duplicate_options = {"question": "سؤال", "options": ["أ", "أ "], "correctAnswer": "أ"}
    assert_error(
        client.post(f"/api/admin/exams/{exam['id']}/questions", headers=headers, json=duplicate_options),
        422, "VALIDATION_ERROR",
    )

    question_ids = []
    for text, options, correct in (
        ("من صاحب الصحيح؟", ["البخاري", "مسلم"], " البخاري "),
        ("كم شروط الصحيح؟", ["ثلاثة", "خمسة"], "خمسة"),
    ):
        response = api_call(client, "POST", f"/api/admin/exams/{exam['id']}/questions", headers=headers, json={
            "question": text, "options": options, "correctAnswer": correct,
        }, schema=ExamQuestion)
        question_ids.append(response.json()["data"]["id"])

    response = api_call(client, "GET", f"/api/admin/exams/{exam['id']}/questions", headers=headers, schema=ExamQuestion)
    questions = response.json()["data"]
    assert [q["order"] for q in questions] == [1, 2]
    assert questions[0]["correctAnswer"] == "البخاري"

    response = client.patch(f"/api/admin/questions/{question_ids[0]}", headers=headers, json={"options": ["مسلم", "أبو داود"]})
    assert_error(response, 422, "VALIDATION_ERROR")
    response = api_call(client, "PATCH", f"/api/admin/questions/{question_ids[0]}", headers=headers,
                        json={"options": ["مسلم", "البخاري", "أبو داود"]}, schema=ExamQuestion)
    assert len(response.json()["data"]["options"]) == 3

    response = api_call(client, "DELETE", f"/api/admin/questions/{question_ids[1]}", headers=headers, schema=ExamQuestion)
    assert response.json()["data"]["id"] == question_ids[1]
    exams = api_call(client, "GET", "/api/exams").json()["data"]
    assert next(e for e in exams if e["id"] == exam["id"])["totalQuestions"] == 1

    response = api_call(client, "PATCH", f"/api/admin/exams/{exam['id']}", headers=headers, json={"duration": 45}, schema=Exam)
    assert response.json()["data"]["duration"] == 45

    api_call(client, "DELETE", f"/api/admin/exams/{exam['id']}", headers=headers)
    exams = api_call(client, "GET", "/api/exams").json()["data"]
    assert exam["id"] not in [e["id"] for e in exams]


def test_missing_admin_resources(client, auth_user):
    _, headers = auth_user(RoleEnum.ADMIN)
    assert_error(client.patch("/api/admin/courses/999999", headers=headers, json={"title": "x"}), 404, "NOT_FOUND")
    assert_error(client.delete("/api/admin/lessons/999999", headers=headers), 404, "NOT_FOUND")
    assert_error(client.get("/api/admin/exams/999999/questions", headers=headers), 404, "NOT_FOUND")
    assert_error(client.delete("/api/admin/questions/999999", headers=headers), 404, "NOT_FOUND")
