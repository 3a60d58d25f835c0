"""Pillow drawing of certificate images.

The layout is a fixed 1800x1200 canvas: double border, institution name,
title, the attestation lines, grade and honors, then the date and number in
the bottom left and a seal in the bottom right.
"""
import io
import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Optional

from PIL import Image, ImageDraw, ImageFont, features

from zuhri.core.constants import DEFAULT_INSTITUTION_NAME, DIPLOMA_LEVELS_BY_LEVEL, TemplateStyleEnum
from zuhri.utils.dates import utcnow

logger = logging.getLogger(__name__)

CANVAS_WIDTH = 1800
CANVAS_HEIGHT = 1200


@dataclass
class TemplateStyle:
    title: str
    background_color: str = "#ffffff"
    text_color: str = "#000000"
    border_color: str = "#d4af37"
    template_style: str = TemplateStyleEnum.CLASSIC.value
    institution_name: str = DEFAULT_INSTITUTION_NAME
    has_logo: bool = False

    @classmethod
    def from_template(cls, template) -> "TemplateStyle":
        return cls(
            title=template.title,
            background_color=template.background_color or "#ffffff",
            text_color=template.text_color or "#000000",
            border_color=template.border_color or "#d4af37",
            template_style=template.template_style or TemplateStyleEnum.CLASSIC.value,
            institution_name=template.institution_name or DEFAULT_INSTITUTION_NAME,
            has_logo=bool(template.logo_url),
        )

    @classmethod
    def default_for_level(cls, level: Optional[str]) -> "TemplateStyle":
        row = DIPLOMA_LEVELS_BY_LEVEL.get(level or "")
        if row is None:
            return cls(title="إتمام المادة")
        return cls(
            title=row["title"],
            background_color=row["background_color"],
            text_color=row["text_color"],
            border_color=row["border_color"],
            template_style=row["template_style"],
        )


@dataclass
class CertificateContent:
    student_name: str
    course_title: str
    grade: float
    certificate_number: str
    issued_at: Optional[datetime] = None
    honors: Optional[str] = None


@lru_cache(maxsize=64)
def _load_font(size: int, font_path: Optional[str]):
    if font_path:
        return ImageFont.truetype(font_path, size)
    return ImageFont.load_default(size=size)


def _text_kwargs() -> dict:
    # Right-to-left shaping needs libraqm; without it glyphs are drawn in logical order.
    if features.check("raqm"):
        return {"direction": "rtl"}
    return {}


def format_grade(grade: float) -> str:
    return f"{grade:g}"


def render_certificate_png(content: CertificateContent, style: TemplateStyle, font_path: Optional[str] = None) -> bytes:
    def _font(size: int):
        return _load_font(size, font_path)

    image = Image.new("RGBA", (CANVAS_WIDTH, CANVAS_HEIGHT), style.background_color)

    if style.template_style == TemplateStyleEnum.ELEGANT.value:
        pattern = Image.new("RGBA", image.size, (0, 0, 0, 0))
        pattern_draw = ImageDraw.Draw(pattern)
        dot = Image.new("RGBA", (1, 1), style.border_color).getpixel((0, 0))
        dot_color = (dot[0], dot[1], dot[2], 13)
        for x in range(0, CANVAS_WIDTH, 60):
            for y in range(0, CANVAS_HEIGHT, 60):
                pattern_draw.ellipse((x + 27, y + 27, x + 33, y + 33), fill=dot_color)
        image = Image.alpha_composite(image, pattern)

    draw = ImageDraw.Draw(image)
    text_kwargs = _text_kwargs()
    center = CANVAS_WIDTH / 2

    draw.rectangle((60, 60, CANVAS_WIDTH - 60, CANVAS_HEIGHT - 60), outline=style.border_color, width=12)
    draw.rectangle((90, 90, CANVAS_WIDTH - 90, CANVAS_HEIGHT - 90), outline=style.border_color, width=3)

    if style.has_logo:
        draw.rectangle((center - 40, 120, center + 40, 200), fill=style.border_color)
        draw.text((center, 170), "LOGO", fill=style.text_color, font=_font(12), anchor="ms")

    draw.text(
        (center, 240 if style.has_logo else 180),
        style.institution_name,
        fill=style.text_color, font=_font(36), anchor="ms", **text_kwargs,
    )

    title_y = 320 if style.has_logo else 260
    draw.text((center, title_y), f"شهادة {style.title}", fill=style.text_color, font=_font(54), anchor="ms", **text_kwargs)
    draw.rectangle((center - 120, title_y + 20, center + 120, title_y + 26), fill=style.border_color)

    main_y = title_y + 80
    draw.text((center, main_y), "يشهد بأن الطالب", fill=style.text_color, font=_font(42), anchor="ms", **text_kwargs)
    draw.text((center, main_y + 80), content.student_name, fill=style.text_color, font=_font(54), anchor="ms", **text_kwargs)
    draw.text((center, main_y + 160), "قد أتم بنجاح دراسة مادة", fill=style.text_color, font=_font(42), anchor="ms", **text_kwargs)
    draw.text((center, main_y + 240), content.course_title, fill=style.text_color, font=_font(48), anchor="ms", **text_kwargs)

    grade_y = main_y + 320
    if content.honors:
        draw.text((center, grade_y), content.honors, fill=style.text_color, font=_font(36), anchor="ms", **text_kwargs)
        grade_y = main_y + 380
    draw.text(
        (center, grade_y), f"الدرجة: {format_grade(content.grade)}%",
        fill=style.text_color, font=_font(36), anchor="ms", **text_kwargs,
    )

    bottom_y = CANVAS_HEIGHT - 120
    issued = (content.issued_at or utcnow()).strftime("%Y-%m-%d")
    draw.text((120, bottom_y), f"التاريخ: {issued}", fill=style.text_color, font=_font(30), anchor="ls", **text_kwargs)
    draw.text(
        (120, bottom_y + 40), f"رقم الشهادة: {content.certificate_number}",
        fill=style.text_color, font=_font(30), anchor="ls", **text_kwargs,
    )

    seal_x, seal_y = CANVAS_WIDTH - 150, bottom_y - 30
    draw.ellipse((seal_x - 50, seal_y - 50, seal_x + 50, seal_y + 50), fill=style.border_color)
    draw.text((seal_x, bottom_y - 35), "ختم", fill=style.text_color, font=_font(18), anchor="ms", **text_kwargs)
    draw.text((seal_x, bottom_y - 15), "الجامعة", fill=style.text_color, font=_font(18), anchor="ms", **text_kwargs)

    buffer = io.BytesIO()
    image.convert("RGB").save(buffer, format="PNG")
    return buffer.getvalue()


def png_to_pdf(png_bytes: bytes) -> bytes:
    image = Image.open(io.BytesIO(png_bytes)).convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="PDF", resolution=150.0)
    return buffer.getvalue()
