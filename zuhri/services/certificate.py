import base64
import binascii
import io
import logging
import secrets
import uuid
from typing import List, Tuple
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from PIL import Image, UnidentifiedImageError

from zuhri.core.config import settings
from zuhri.core.constants import RoleEnum, CertificateFormatEnum
from zuhri.crud.certificate import certificate as crud_certificate
from zuhri.crud.certificate_image import certificate_image as crud_certificate_image
from zuhri.crud.diploma_template import diploma_template as crud_diploma_template
from zuhri.models.certificate import Certificate
from zuhri.models.certificate_image import CertificateImage
from zuhri.models.course import Course
from zuhri.models.exam_attempt import ExamAttempt
from zuhri.models.user import User
from zuhri.schemas.certificate import (
    CertificateWithCourse,
    CertificateVerification,
    CertificateGenerateRequest,
    GeneratedImage,
)
from zuhri.services.certificate_renderer import (
    CertificateContent,
    TemplateStyle,
    render_certificate_png,
    png_to_pdf,
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
)
from zuhri.services.certificate_storage import certificate_storage
from zuhri.services.grading import honors_for_grade
from zuhri.utils.dates import utcnow

logger = logging.getLogger(__name__)

NUMBER_ATTEMPTS = 5


def decode_canvas_data(canvas_data: str) -> bytes:
    """Decode a ``data:image/png;base64,...`` string (or bare base64) into PNG bytes."""
    payload = canvas_data.split(",", 1)[1] if canvas_data.startswith("data:") else canvas_data
    try:
        raw = base64.b64decode(payload, validate=True)
        with Image.open(io.BytesIO(raw)) as image:
            if image.format != "PNG":
                raise ValueError(image.format)
    except (binascii.Error, UnidentifiedImageError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="canvasData must be a base64 encoded PNG image.",
        )
    return raw


def to_certificate_with_course(certificate: Certificate) -> CertificateWithCourse:
    result = CertificateWithCourse.model_validate(certificate)
    if certificate.course is not None:
        result.course_title = certificate.course.title
        result.course_level = certificate.course.level
    return result


class CertificateService:
    def generate_number(self, db: Session, user_id: int) -> str:
        for _ in range(NUMBER_ATTEMPTS):
            number = f"CERT-{utcnow():%Y%m%d%H%M%S}-{user_id:04d}-{secrets.token_hex(2).upper()}"
            if not crud_certificate.get_by_number(db, certificate_number=number):
                return number
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not allocate a unique certificate number.",
        )

    def issue_for_attempt(self, db: Session, *, attempt: ExamAttempt, user: User, course: Course) -> Certificate:
        """Issue the certificate for a passed attempt. Re-issuing returns the existing one."""
        existing = crud_certificate.get_by_attempt(db, exam_attempt_id=attempt.id)
        if existing:
            return existing

        template = crud_diploma_template.get_active_by_level(db, level=course.level)
        certificate = Certificate(
            user_id=user.id,
            course_id=course.id,
            exam_attempt_id=attempt.id,
            diploma_template_id=template.id if template else None,
            certificate_number=self.generate_number(db, user.id),
            student_name=user.full_name,
            grade=attempt.score,
            honors=honors_for_grade(attempt.score),
            specialization=user.specialization,
            completion_date=attempt.completed_at or utcnow(),
            is_valid=True,
        )
        db.add(certificate)
        db.flush()
        logger.info(f"Issued certificate {certificate.certificate_number} to user {user.id} for course {course.id}")
        return certificate

    def list_mine(self, db: Session, *, user: User) -> List[CertificateWithCourse]:
        return [to_certificate_with_course(c) for c in crud_certificate.get_valid_by_user(db, user_id=user.id)]

    def get_certificate(self, db: Session, *, user: User, certificate_id: int) -> Certificate:
        certificate = crud_certificate.get(db, id=certificate_id)
        if not certificate or (certificate.user_id != user.id and user.role != RoleEnum.ADMIN):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Certificate not found.")
        return certificate

    def verify(self, db: Session, *, certificate_number: str) -> CertificateVerification:
        certificate = crud_certificate.get_by_number(db, certificate_number=certificate_number)
        if not certificate:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Certificate not found.")
        if not certificate.is_valid:
            return CertificateVerification(certificate_number=certificate.certificate_number, is_valid=False)
        return CertificateVerification(
            certificate_number=certificate.certificate_number,
            is_valid=True,
            student_name=certificate.student_name,
            course_title=certificate.course.title if certificate.course else None,
            grade=certificate.grade,
            issued_at=certificate.issued_at,
        )

    def revoke(self, db: Session, *, certificate_id: int) -> Certificate:
        certificate = crud_certificate.get(db, id=certificate_id)
        if not certificate:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Certificate not found.")
        certificate = crud_certificate.update(db, db_obj=certificate, obj_in={"is_valid": False})
        logger.info(f"Certificate {certificate.certificate_number} revoked")
        return certificate

    def generate_image(self, db: Session, *, user: User, request: CertificateGenerateRequest) -> GeneratedImage:
        certificate = self.get_certificate(db, user=user, certificate_id=request.certificate_id)
        template = crud_diploma_template.get_any(db, id=request.template_id)
        if not template:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Diploma template not found.")

        if request.canvas_data:
            png_bytes = decode_canvas_data(request.canvas_data)
            source = "client"
        else:
            png_bytes = render_certificate_png(
                CertificateContent(
                    student_name=certificate.student_name,
                    course_title=certificate.course.title,
                    grade=certificate.grade,
                    certificate_number=certificate.certificate_number,
                    issued_at=certificate.issued_at,
                    honors=certificate.honors,
                ),
                TemplateStyle.from_template(template),
                font_path=settings.CERTIFICATE_FONT_PATH,
            )
            source = "server"

        name = f"{certificate.certificate_number}-{uuid.uuid4().hex[:8]}"
        image_url = certificate_storage.save(png_bytes, name)
        image = crud_certificate_image.create(
            db,
            obj_in={
                "certificate_id": certificate.id,
                "template_id": template.id,
                "image_url": image_url,
                "generated_by": user.id,
                "meta": {
                    "source": source,
                    "width": CANVAS_WIDTH,
                    "height": CANVAS_HEIGHT,
                    "format": CertificateFormatEnum.PNG.value,
                    "certificateData": request.certificate_data or {},
                },
            },
        )
        logger.info(f"Generated {source} image {image.id} for certificate {certificate.id}")
        return GeneratedImage(image_id=image.id, image_url=image.image_url)

    def list_images(self, db: Session, *, user: User, certificate_id: int) -> List[CertificateImage]:
        certificate = self.get_certificate(db, user=user, certificate_id=certificate_id)
        return crud_certificate_image.get_by_certificate(db, certificate_id=certificate.id)

    def download(
        self, db: Session, *, user: User, certificate_id: int, image_id: int, fmt: CertificateFormatEnum
    ) -> Tuple[bytes, str, str]:
        certificate = self.get_certificate(db, user=user, certificate_id=certificate_id)
        image = crud_certificate_image.get(db, id=image_id)
        if not image or image.certificate_id != certificate.id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Certificate image not found.")

        png_bytes = certificate_storage.load(image.image_url)
        filename = f"certificate-{certificate.certificate_number}"
        if fmt == CertificateFormatEnum.PDF:
            return png_to_pdf(png_bytes), "application/pdf", f"{filename}.pdf"
        return png_bytes, "image/png", f"{filename}.png"

certificate_service = CertificateService()
