import json

import httpx
import pytest

from zuhri.client.api import AccessDeniedError, ApiClient, ApiError, UnauthorizedError


def _envelope(data, message="ok"):
    return {"message": message, "data": data}


def _error(code, message, details=None):
    return {"error": {"code": code, "message": message, "details": details}, "timestamp": "", "path": ""}


@pytest.mark.asyncio
async def test_unwraps_envelope_and_sends_token():
    seen = {}

    def handler(request: httpx.Request):
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_envelope({"id": 7, "watchedDuration": 30}))

    async with ApiClient("http://test", token="abc", transport=httpx.MockTransport(handler)) as client:
        data = await client.report_lesson_progress(7, watched_duration=30, is_completed=False, course_id=3)

    assert data == {"id": 7, "watchedDuration": 30}
    assert seen["auth"] == "Bearer abc"
    assert seen["body"] == {"watchedDuration": 30, "isCompleted": False, "courseId": 3}


@pytest.mark.asyncio
async def test_unauthorized_calls_hook():
    redirected = []

    def handler(request):
        return httpx.Response(401, json=_error("UNAUTHORIZED", "Token has been revoked"))

    client = ApiClient("http://test", on_unauthorized=lambda: redirected.append(True), transport=httpx.MockTransport(handler))
    with pytest.raises(UnauthorizedError) as exc_info:
        await client.get_course_exam(1)
    await client.aclose()

    assert exc_info.value.message == "Token has been revoked"
    assert redirected == [True]


@pytest.mark.asyncio
async def test_access_denied_carries_lesson_counts():
    def handler(request):
        return httpx.Response(403, json=_error(
            "FORBIDDEN", "You must complete all lessons before taking the exam", {"required": 5, "completed": 3}
        ))

    async with ApiClient("http://test", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(AccessDeniedError) as exc_info:
            await client.get_course_exam(1)

    assert exc_info.value.required == 5
    assert exc_info.value.completed == 3


@pytest.mark.asyncio
async def test_other_errors_and_network_failures():
    def handler(request):
        if request.url.path.endswith("/submit"):
            return httpx.Response(409, json=_error("CONFLICT", "This exam attempt has already been submitted."))
        raise httpx.ConnectError("connection refused")

    async with ApiClient("http://test", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ApiError) as conflict:
            await client.submit_attempt(1, {})
        with pytest.raises(ApiError) as network:
            await client.start_exam(1)

    assert conflict.value.status_code == 409
    assert network.value.status_code == 0


@pytest.mark.asyncio
async def test_set_token_and_binary_download():
    seen = []

    def handler(request):
        seen.append((request.headers.get("Authorization"), dict(request.url.params)))
        return httpx.Response(200, content=b"%PDF-1.4", headers={"Content-Type": "application/pdf"})

    async with ApiClient("http://test", transport=httpx.MockTransport(handler)) as client:
        client.set_token("new-token")
        content = await client.download_certificate(3, 9, fmt="pdf")
        client.set_token(None)
        await client.download_certificate(3, 9)

    assert content == b"%PDF-1.4"
    assert seen[0] == ("Bearer new-token", {"format": "pdf"})
    assert seen[1] == (None, {"format": "png"})


@pytest.mark.asyncio
async def test_non_json_success_body_raises_api_error():
    def handler(request):
        return httpx.Response(200, content=b"<html>gateway</html>")

    async with ApiClient("http://test", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.start_exam(1)

    assert exc_info.value.status_code == 200
