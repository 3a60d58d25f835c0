import io

import httpx
import pytest
from PIL import Image

from zuhri.client.api import ApiClient
from zuhri.client.certificates import CertificateDownloader, style_from_template
from zuhri.services.certificate_renderer import CANVAS_HEIGHT, CANVAS_WIDTH

CERTIFICATE = {
    "id": 5,
    "studentName": "محمد الحسن",
    "courseTitle": "مصطلح الحديث",
    "courseLevel": "تمهيدي",
    "grade": 92.5,
    "honors": "بتقدير امتياز",
    "certificateNumber": "CERT-20250101120000-0001-ABCD",
    "issuedAt": "2025-01-01T12:00:00Z",
}
TEMPLATE = {"id": 8, "title": "الديبلوم التمهيدي", "backgroundColor": "#f0fdf4", "templateStyle": "elegant"}


def test_style_from_template_maps_camel_case_fields():
    style = style_from_template(TEMPLATE)
    assert style.title == "الديبلوم التمهيدي"
    assert style.background_color == "#f0fdf4"
    assert style.text_color == "#000000"
    assert style.template_style == "elegant"
    assert style.has_logo is False


@pytest.mark.asyncio
async def test_server_image_is_used_when_available():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        if request.url.path == "/api/certificates/generate":
            return httpx.Response(201, json={"message": "ok", "data": {"imageId": 12, "imageUrl": "x"}})
        return httpx.Response(200, content=b"%PDF-server")

    async with ApiClient("http://test", transport=httpx.MockTransport(handler)) as client:
        content = await CertificateDownloader(client).download(CERTIFICATE, TEMPLATE, fmt="pdf")

    assert content == b"%PDF-server"
    assert calls == ["/api/certificates/generate", "/api/certificates/5/download/12"]


@pytest.mark.asyncio
async def test_falls_back_to_local_render_on_server_error():
    def handler(request):
        return httpx.Response(500, json={"error": {"code": "INTERNAL_SERVER_ERROR", "message": "boom"}})

    async with ApiClient("http://test", transport=httpx.MockTransport(handler)) as client:
        content = await CertificateDownloader(client).download(CERTIFICATE, TEMPLATE)

    with Image.open(io.BytesIO(content)) as image:
        assert image.format == "PNG"
        assert image.size == (CANVAS_WIDTH, CANVAS_HEIGHT)


@pytest.mark.asyncio
async def test_renders_locally_without_template():
    def handler(request):
        raise AssertionError("no request expected")

    async with ApiClient("http://test", transport=httpx.MockTransport(handler)) as client:
        content = await CertificateDownloader(client).download(CERTIFICATE, None, fmt="pdf")

    assert content.startswith(b"%PDF")


@pytest.mark.parametrize("body", [b"", b"<html>gateway</html>"])
@pytest.mark.asyncio
async def test_falls_back_when_generate_returns_unusable_body(body):
    def handler(request):
        if request.url.path == "/api/certificates/generate":
            return httpx.Response(200, content=body)
        raise AssertionError("download must not be attempted without an image id")

    async with ApiClient("http://test", transport=httpx.MockTransport(handler)) as client:
        content = await CertificateDownloader(client).download(CERTIFICATE, TEMPLATE)

    with Image.open(io.BytesIO(content)) as image:
        assert image.format == "PNG"
        assert image.size == (CANVAS_WIDTH, CANVAS_HEIGHT)
