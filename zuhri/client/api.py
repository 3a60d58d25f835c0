"""Async HTTP client for the learning API.

Every call unwraps the ``{"message", "data"}`` envelope and maps failures:
401 -> UnauthorizedError (after invoking ``on_unauthorized``), 403 ->
AccessDeniedError, anything else -> ApiError.
"""
import logging
from typing import Any, Callable, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details or {}


class UnauthorizedError(ApiError):
    pass


class AccessDeniedError(ApiError):
    @property
    def required(self) -> Optional[int]:
        return self.details.get("required")

    @property
    def completed(self) -> Optional[int]:
        return self.details.get("completed")


def _error_from_response(response: httpx.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        body = {}

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        message = error.get("message") or response.reason_phrase
        details = error.get("details") or {}
    else:
        message = (body.get("message") if isinstance(body, dict) else None) or response.reason_phrase
        details = {k: v for k, v in body.items() if k != "message"} if isinstance(body, dict) else {}

    if response.status_code == 401:
        return UnauthorizedError(401, message, details)
    if response.status_code == 403:
        return AccessDeniedError(403, message, details)
    return ApiError(response.status_code, message, details)


class ApiClient:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        on_unauthorized: Optional[Callable[[], Any]] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.on_unauthorized = on_unauthorized
        self._client = httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def set_token(self, token: Optional[str]) -> None:
        if token:
            self._client.headers["Authorization"] = f"Bearer {token}"
        else:
            self._client.headers.pop("Authorization", None)

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise ApiError(0, f"Network error: {e}")

        if response.is_success:
            return response

        error = _error_from_response(response)
        if isinstance(error, UnauthorizedError) and self.on_unauthorized is not None:
            logger.info("Session rejected by server, redirecting to login")
            self.on_unauthorized()
        raise error

    async def request(self, method: str, path: str, json: Any = None, params: Optional[dict] = None) -> Any:
        response = await self._send(method, path, json=json, params=params)
        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError:
            raise ApiError(response.status_code, f"Unexpected non-JSON response from {path}")
        if isinstance(body, dict) and "data" in body and "message" in body:
            return body["data"]
        return body

    async def request_bytes(self, method: str, path: str, params: Optional[dict] = None) -> bytes:
        response = await self._send(method, path, params=params)
        return response.content

    async def report_lesson_progress(
        self, lesson_id: int, *, watched_duration: int, is_completed: bool, course_id: Optional[int] = None
    ) -> Dict[str, Any]:
        return await self.request(
            "POST",
            f"/api/lessons/{lesson_id}/progress",
            json={"watchedDuration": watched_duration, "isCompleted": is_completed, "courseId": course_id},
        )

    async def get_course_exam(self, course_id: int) -> Dict[str, Any]:
        return await self.request("GET", f"/api/courses/{course_id}/exam")

    async def start_exam(self, exam_id: int) -> Dict[str, Any]:
        return await self.request("POST", f"/api/exams/{exam_id}/start")

    async def save_answers(self, attempt_id: int, answers: Dict[str, str]) -> Dict[str, Any]:
        return await self.request("PUT", f"/api/exam-attempts/{attempt_id}/answers", json={"answers": answers})

    async def submit_attempt(self, attempt_id: int, answers: Dict[str, str]) -> Dict[str, Any]:
        return await self.request("POST", f"/api/exam-attempts/{attempt_id}/submit", json={"answers": answers})

    async def generate_certificate(self, certificate_id: int, template_id: int) -> Dict[str, Any]:
        return await self.request(
            "POST",
            "/api/certificates/generate",
            json={"certificateId": certificate_id, "templateId": template_id},
        )

    async def download_certificate(self, certificate_id: int, image_id: int, fmt: str = "png") -> bytes:
        return await self.request_bytes(
            "GET", f"/api/certificates/{certificate_id}/download/{image_id}", params={"format": fmt}
        )
