from fastapi.testclient import TestClient
from sqlalchemy.orm import Session


def _report(client, headers, lesson_id, watched, completed=False, course_id=None):
    payload = {"watchedDuration": watched, "isCompleted": completed}
    if course_id is not None:
        payload["courseId"] = course_id
    return client.post(f"/api/lessons/{lesson_id}/progress", headers=headers, json=payload)


def test_lesson_progress_full_flow(client: TestClient, auth_user, course_factory, db_session: Session):
    """
    Enrollment, monotonic watch position, 90% completion, sticky completion and course rollup.
    """
    print("\n[TEST] Lesson progress flow")

    course, lessons, _, _ = course_factory(lesson_durations=(600, 900))
    student, headers = auth_user()

    print("[1] Reporting before enrollment")
    r = _report(client, headers, lessons[0].id, 60)
    assert r.status_code == 404, f"Expected 404 before enrollment: {r.text}"
    print("[OK] Progress rejected without enrollment")

    print("[2] Enrolling in course")
    r = client.post(f"/api/courses/{course.id}/enroll", headers=headers)
    assert r.status_code == 201, f"Enrollment failed: {r.text}"
    assert r.json()["data"]["progress"] == 0
    r = client.post(f"/api/courses/{course.id}/enroll", headers=headers)
    assert r.status_code == 409, f"Duplicate enrollment should conflict: {r.text}"
    assert r.json()["error"]["code"] == "CONFLICT"
    print("[OK] Enrolled once")

    print("[3] Reporting partial progress")
    r = _report(client, headers, lessons[0].id, 100, course_id=course.id)
    assert r.status_code == 200, f"Progress report failed: {r.text}"
    data = r.json()["data"]
    assert data["watchedDuration"] == 100
    assert data["isCompleted"] is False
    print("[OK] Partial progress saved")

    print("[4] A smaller position never lowers the stored value")
    r = _report(client, headers, lessons[0].id, 50)
    assert r.json()["data"]["watchedDuration"] == 100
    print("[OK] Progress is monotonic")

    print("[5] The client flag alone does not complete a lesson with a known length")
    r = _report(client, headers, lessons[0].id, 120, completed=True)
    assert r.json()["data"]["isCompleted"] is False
    print("[OK] Completion derived on the server")

    print("[6] Reaching 90% completes the lesson")
    r = _report(client, headers, lessons[0].id, 540)
    data = r.json()["data"]
    assert data["isCompleted"] is True
    assert data["completedAt"] is not None
    print("[OK] Lesson completed")

    print("[7] Completion is sticky")
    r = _report(client, headers, lessons[0].id, 10)
    data = r.json()["data"]
    assert data["isCompleted"] is True
    assert data["watchedDuration"] == 540
    print("[OK] Completion kept")

    print("[8] Course progress rolls up")
    r = client.get(f"/api/courses/{course.id}/progress", headers=headers)
    assert r.status_code == 200, f"Course progress failed: {r.text}"
    data = r.json()["data"]
    assert data["progress"] == 50.0
    assert data["completedLessons"] == 1
    assert data["totalLessons"] == 2
    assert data["enrollment"]["completedAt"] is None
    print("[OK] Half the course completed")

    print("[9] Positions past the end are clamped to the lesson length")
    r = _report(client, headers, lessons[1].id, 5000)
    data = r.json()["data"]
    assert data["watchedDuration"] == 900
    assert data["isCompleted"] is True

    r = client.get("/api/my-enrollments", headers=headers)
    assert r.status_code == 200
    enrollment = next(e for e in r.json()["data"] if e["courseId"] == course.id)
    assert enrollment["progress"] == 100.0
    assert enrollment["completedAt"] is not None
    print("[OK] Course completed")


def test_progress_rejects_mismatched_course(client: TestClient, auth_user, course_factory):
    course, lessons, _, _ = course_factory(lesson_durations=(600,))
    other_course, _, _, _ = course_factory(lesson_durations=(600,))
    _, headers = auth_user()
    client.post(f"/api/courses/{course.id}/enroll", headers=headers)

    r = _report(client, headers, lessons[0].id, 30, course_id=other_course.id)
    assert r.status_code == 400, r.text
    assert r.json()["error"]["code"] == "BAD_REQUEST"


def test_progress_for_unknown_lesson(client: TestClient, auth_user):
    _, headers = auth_user()
    r = _report(client, headers, 999999, 30)
    assert r.status_code == 404


def test_lesson_without_length_uses_client_flag(client: TestClient, auth_user, course_factory):
    course, lessons, _, _ = course_factory(lesson_durations=(None,))
    _, headers = auth_user()
    client.post(f"/api/courses/{course.id}/enroll", headers=headers)

    r = _report(client, headers, lessons[0].id, 30, completed=False)
    assert r.json()["data"]["isCompleted"] is False
    r = _report(client, headers, lessons[0].id, 30, completed=True)
    assert r.json()["data"]["isCompleted"] is True


def test_progress_for_course_without_enrollment(client: TestClient, auth_user, course_factory):
    course, _, _, _ = course_factory()
    _, headers = auth_user()
    r = client.get(f"/api/courses/{course.id}/progress", headers=headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["enrollment"] is None
    assert data["progress"] == 0.0
    assert data["lessons"] == []
