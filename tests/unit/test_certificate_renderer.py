import base64
import io
from datetime import datetime
from types import SimpleNamespace

import pytest
from fastapi import HTTPException
from PIL import Image

from zuhri.core.constants import CourseLevelEnum, DEFAULT_INSTITUTION_NAME
from zuhri.services.certificate import decode_canvas_data
from zuhri.services.certificate_renderer import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    CertificateContent,
    TemplateStyle,
    format_grade,
    png_to_pdf,
    render_certificate_png,
)

CONTENT = CertificateContent(
    student_name="محمد الحسن",
    course_title="مصطلح الحديث",
    grade=87.5,
    certificate_number="CERT-20250101120000-0007-AB12",
    issued_at=datetime(2025, 1, 1, 12, 0),
    honors="بتقدير امتياز",
)


@pytest.mark.parametrize("template_style", ["classic", "modern", "elegant"])
def test_render_produces_full_size_png(template_style):
    style = TemplateStyle(title="الديبلوم التمهيدي", template_style=template_style, has_logo=template_style == "modern")
    png_bytes = render_certificate_png(CONTENT, style)
    with Image.open(io.BytesIO(png_bytes)) as image:
        assert image.format == "PNG"
        assert image.size == (CANVAS_WIDTH, CANVAS_HEIGHT)


def test_background_color_is_applied():
    style = TemplateStyle(title="x", background_color="#102030")
    png_bytes = render_certificate_png(CONTENT, style)
    with Image.open(io.BytesIO(png_bytes)) as image:
        assert image.convert("RGB").getpixel((30, 30)) == (0x10, 0x20, 0x30)


def test_png_to_pdf():
    pdf_bytes = png_to_pdf(render_certificate_png(CONTENT, TemplateStyle(title="x")))
    assert pdf_bytes.startswith(b"%PDF")


def test_style_from_template_fills_blanks():
    template = SimpleNamespace(
        title="ديبلوم", background_color=None, text_color="#111111", border_color=None,
        template_style=None, institution_name=None, logo_url="https://example.com/logo.png",
    )
    style = TemplateStyle.from_template(template)
    assert style.background_color == "#ffffff"
    assert style.text_color == "#111111"
    assert style.template_style == "classic"
    assert style.institution_name == DEFAULT_INSTITUTION_NAME
    assert style.has_logo is True


def test_default_style_for_level():
    style = TemplateStyle.default_for_level(CourseLevelEnum.MASTER.value)
    assert "ماجستير" in style.title
    assert TemplateStyle.default_for_level("unknown").title == "إتمام المادة"


def test_format_grade():
    assert format_grade(87.5) == "87.5"
    assert format_grade(90.0) == "90"


def test_decode_canvas_data_accepts_data_url():
    png_bytes = render_certificate_png(CONTENT, TemplateStyle(title="x"))
    data_url = "data:image/png;base64," + base64.b64encode(png_bytes).decode()
    assert decode_canvas_data(data_url) == png_bytes


def test_decode_canvas_data_rejects_non_png():
    buffer = io.BytesIO()
    Image.new("RGB", (10, 10)).save(buffer, format="JPEG")
    with pytest.raises(HTTPException) as exc_info:
        decode_canvas_data(base64.b64encode(buffer.getvalue()).decode())
    assert exc_info.value.status_code == 422

    with pytest.raises(HTTPException):
        decode_canvas_data("data:image/png;base64,not-base64!!")
