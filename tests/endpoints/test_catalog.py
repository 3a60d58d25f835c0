from zuhri.schemas.course import Course
from zuhri.schemas.enrollment import EnrollmentWithCourse
from zuhri.schemas.exam import Exam
from zuhri.schemas.lesson import Lesson
from tests.helpers.asserts import api_call, assert_error


def test_course_catalog_is_public(client, course_factory):
    client.cookies.clear()
    course, lessons, _, _ = course_factory(lesson_durations=(300, 600, 900))

    response = api_call(client, "GET", "/api/courses?limit=1000", schema=Course)
    assert course.id in [c["id"] for c in response.json()["data"]]

    response = api_call(client, "GET", f"/api/courses/{course.id}", schema=Course)
    data = response.json()["data"]
    assert data["totalLessons"] == 3
    assert data["level"] == course.level

    response = api_call(client, "GET", f"/api/courses/{course.id}/lessons", schema=Lesson)
    assert [l["order"] for l in response.json()["data"]] == [1, 2, 3]
    assert [l["duration"] for l in response.json()["data"]] == [300, 600, 900]


def test_unknown_course(client):
    assert_error(client.get("/api/courses/999999"), 404, "NOT_FOUND")
    assert_error(client.get("/api/courses/999999/lessons"), 404, "NOT_FOUND")


def test_exams_listing(client, course_factory, sample_questions):
    _, _, exam, _ = course_factory(questions=sample_questions)
    response = api_call(client, "GET", "/api/exams", schema=Exam)
    listed = next(e for e in response.json()["data"] if e["id"] == exam.id)
    assert listed["totalQuestions"] == 4
    assert listed["passingGrade"] == 70


def test_enrollment_requires_auth(client, course_factory):
    client.cookies.clear()
    course, _, _, _ = course_factory()
    assert_error(client.post(f"/api/courses/{course.id}/enroll"), 401, "UNAUTHORIZED")


def test_enroll_in_unknown_course(client, auth_user):
    _, headers = auth_user()
    assert_error(client.post("/api/courses/999999/enroll", headers=headers), 404, "NOT_FOUND")


def test_my_enrollments_include_course(client, auth_user, course_factory):
    course, _, _, _ = course_factory()
    _, headers = auth_user()
    api_call(client, "POST", f"/api/courses/{course.id}/enroll", headers=headers)
    response = api_call(client, "GET", "/api/my-enrollments", headers=headers, schema=EnrollmentWithCourse)
    enrollments = response.json()["data"]
    assert len(enrollments) == 1
    assert enrollments[0]["course"]["title"] == course.title


def test_course_exam_for_course_without_exam(client, auth_user, course_factory, complete_lessons):
    course, lessons, _, _ = course_factory()
    student, headers = auth_user()
    complete_lessons(student, course, lessons)
    assert_error(client.get(f"/api/courses/{course.id}/exam", headers=headers), 404, "NOT_FOUND")


def test_course_without_lessons_has_open_exam(client, auth_user, course_factory, sample_questions):
    course, _, exam, _ = course_factory(lesson_durations=(), questions=sample_questions)
    _, headers = auth_user()
    response = api_call(client, "GET", f"/api/courses/{course.id}/exam", headers=headers)
    assert response.json()["data"]["exam"]["id"] == exam.id
