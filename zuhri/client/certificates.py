import logging
from datetime import datetime
from typing import Any, Dict, Optional

from zuhri.client.api import ApiClient, ApiError
from zuhri.services.certificate_renderer import (
    CertificateContent,
    TemplateStyle,
    render_certificate_png,
    png_to_pdf,
)

logger = logging.getLogger(__name__)


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def style_from_template(template: Dict[str, Any]) -> TemplateStyle:
    defaults = TemplateStyle(title=template.get("title") or "")
    return TemplateStyle(
        title=template.get("title") or defaults.title,
        background_color=template.get("backgroundColor") or defaults.background_color,
        text_color=template.get("textColor") or defaults.text_color,
        border_color=template.get("borderColor") or defaults.border_color,
        template_style=template.get("templateStyle") or defaults.template_style,
        institution_name=template.get("institutionName") or defaults.institution_name,
        has_logo=bool(template.get("logoUrl")),
    )


class CertificateDownloader:
    """Fetches a certificate image from the server, drawing it locally when that fails."""

    def __init__(self, client: ApiClient, font_path: Optional[str] = None):
        self.client = client
        self.font_path = font_path

    async def download(
        self, certificate: Dict[str, Any], template: Optional[Dict[str, Any]] = None, fmt: str = "png"
    ) -> bytes:
        if template is not None:
            try:
                generated = await self.client.generate_certificate(certificate["id"], template["id"])
                if not isinstance(generated, dict) or "imageId" not in generated:
                    raise ApiError(0, f"Generate returned no image id: {generated!r}")
                return await self.client.download_certificate(certificate["id"], generated["imageId"], fmt)
            except Exception as e:
                logger.warning(f"Server certificate download failed, rendering locally: {e}")
        else:
            logger.info("No diploma template available, rendering certificate locally")

        return self.render_locally(certificate, template, fmt)

    def render_locally(
        self, certificate: Dict[str, Any], template: Optional[Dict[str, Any]] = None, fmt: str = "png"
    ) -> bytes:
        style = style_from_template(template) if template else TemplateStyle.default_for_level(certificate.get("courseLevel"))
        png_bytes = render_certificate_png(
            CertificateContent(
                student_name=certificate.get("studentName") or "",
                course_title=certificate.get("courseTitle") or "",
                grade=float(certificate.get("grade") or 0),
                certificate_number=certificate.get("certificateNumber") or "",
                issued_at=_parse_datetime(certificate.get("issuedAt")),
                honors=certificate.get("honors"),
            ),
            style,
            font_path=self.font_path,
        )
        if fmt == "pdf":
            return png_to_pdf(png_bytes)
        return png_bytes
