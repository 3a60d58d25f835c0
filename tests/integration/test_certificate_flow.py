import base64
import io

from fastapi.testclient import TestClient
from PIL import Image

from zuhri.core.constants import RoleEnum, CourseLevelEnum


def _pass_exam(client, headers, exam, questions):
    attempt_id = client.post(f"/api/exams/{exam.id}/start", headers=headers).json()["data"]["id"]
    answers = {str(q.id): q.correct_answer for q in questions}
    result = client.post(f"/api/exam-attempts/{attempt_id}/submit", headers=headers, json={"answers": answers})
    return result.json()["data"]["certificateId"]


def test_certificate_image_generation_and_download(
    client: TestClient, auth_user, course_factory, complete_lessons, sample_questions
):
    """
    Template lookup at issuance, server-side rendering, image listing, PDF and PNG download, revocation.
    """
    print("\n[TEST] Certificate image flow")
    _, admin_headers = auth_user(RoleEnum.ADMIN)

    print("[1] Admin creates a diploma template for the course level")
    r = client.post("/api/admin/diploma-templates", headers=admin_headers, json={
        "title": "الدبلوم المتوسط",
        "level": CourseLevelEnum.INTERMEDIATE.value,
        "backgroundColor": "#fff7ed",
        "templateStyle": "modern",
    })
    assert r.status_code == 201, f"Template creation failed: {r.text}"
    template = r.json()["data"]
    assert template["institutionName"] == "جامعة الإمام الزُّهري"
    print(f"[OK] Template created: {template['id']}")

    course, lessons, exam, questions = course_factory(
        level=CourseLevelEnum.INTERMEDIATE.value, questions=sample_questions
    )
    student, headers = auth_user()
    complete_lessons(student, course, lessons)
    certificate_id = _pass_exam(client, headers, exam, questions)
    assert certificate_id is not None

    r = client.get(f"/api/certificates/{certificate_id}", headers=headers)
    certificate = r.json()["data"]
    assert certificate["courseLevel"] == CourseLevelEnum.INTERMEDIATE.value
    assert certificate["diplomaTemplateId"] is not None
    print("[OK] Certificate linked to an active template of its level")

    print("[2] Server renders the image")
    r = client.post("/api/certificates/generate", headers=headers, json={
        "certificateId": certificate_id,
        "templateId": template["id"],
        "certificateData": {"locale": "ar"},
    })
    assert r.status_code == 201, f"Generation failed: {r.text}"
    generated = r.json()["data"]
    image_id = generated["imageId"]
    assert generated["imageUrl"]

    r = client.get(f"/api/certificates/{certificate_id}/images", headers=headers)
    images = r.json()["data"]
    assert [i["id"] for i in images] == [image_id]
    assert images[0]["metadata"]["source"] == "server"
    assert images[0]["metadata"]["width"] == 1800
    print(f"[OK] Image stored: {image_id}")

    print("[3] Downloading as PDF and PNG")
    r = client.get(f"/api/certificates/{certificate_id}/download/{image_id}", headers=headers)
    assert r.status_code == 200, r.text
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")
    assert "attachment" in r.headers["content-disposition"]

    r = client.get(f"/api/certificates/{certificate_id}/download/{image_id}?format=png", headers=headers)
    assert r.headers["content-type"] == "image/png"
    with Image.open(io.BytesIO(r.content)) as image:
        assert image.size == (1800, 1200)
    print("[OK] Downloads served")

    print("[4] Other students cannot reach the certificate")
    _, other_headers = auth_user()
    r = client.get(f"/api/certificates/{certificate_id}", headers=other_headers)
    assert r.status_code == 404
    r = client.get(f"/api/certificates/{certificate_id}/download/{image_id}", headers=other_headers)
    assert r.status_code == 404
    r = client.get(f"/api/certificates/{certificate_id}", headers=admin_headers)
    assert r.status_code == 200
    print("[OK] Ownership enforced")

    print("[5] Revocation")
    r = client.post(f"/api/admin/certificates/{certificate_id}/revoke", headers=headers)
    assert r.status_code == 403
    r = client.post(f"/api/admin/certificates/{certificate_id}/revoke", headers=admin_headers)
    assert r.status_code == 200, r.text
    assert r.json()["data"]["isValid"] is False

    r = client.get(f"/api/certificates/verify/{certificate['certificateNumber']}")
    verification = r.json()["data"]
    assert verification["isValid"] is False
    assert verification["studentName"] is None
    r = client.get("/api/my-certificates", headers=headers)
    assert r.json()["data"] == []
    print("[OK] Revoked certificate no longer valid")


def test_client_rendered_canvas_is_stored(
    client: TestClient, auth_user, course_factory, complete_lessons, sample_questions
):
    _, admin_headers = auth_user(RoleEnum.ADMIN)
    template = client.post("/api/admin/diploma-templates", headers=admin_headers, json={
        "title": "ديبلوم", "level": CourseLevelEnum.PREPARATORY.value,
    }).json()["data"]

    course, lessons, exam, questions = course_factory(questions=sample_questions)
    student, headers = auth_user()
    complete_lessons(student, course, lessons)
    certificate_id = _pass_exam(client, headers, exam, questions)

    buffer = io.BytesIO()
    Image.new("RGB", (1800, 1200), "#ffffff").save(buffer, format="PNG")
    canvas_data = "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode()

    r = client.post("/api/certificates/generate", headers=headers, json={
        "certificateId": certificate_id, "templateId": template["id"], "canvasData": canvas_data,
    })
    assert r.status_code == 201, r.text
    image_id = r.json()["data"]["imageId"]
    r = client.get(f"/api/certificates/{certificate_id}/images", headers=headers)
    assert r.json()["data"][0]["metadata"]["source"] == "client"

    r = client.get(f"/api/certificates/{certificate_id}/download/{image_id}?format=png", headers=headers)
    assert r.content == buffer.getvalue()

    r = client.post("/api/certificates/generate", headers=headers, json={
        "certificateId": certificate_id, "templateId": template["id"], "canvasData": "data:image/png;base64,AAAA",
    })
    assert r.status_code == 422


def test_verify_unknown_certificate(client: TestClient):
    r = client.get("/api/certificates/verify/CERT-00000000000000-0000-FFFF")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"
