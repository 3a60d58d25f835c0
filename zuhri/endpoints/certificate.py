from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from zuhri.core.constants import CertificateFormatEnum
from zuhri.models.user import User
from zuhri.schemas.certificate import (
    Certificate,
    CertificateWithCourse,
    CertificateVerification,
    CertificateGenerateRequest,
    CertificateImage,
    GeneratedImage,
)
from zuhri.schemas.response import APIResponse
from zuhri.services.certificate import certificate_service, to_certificate_with_course
from zuhri.utils import deps

router = APIRouter()

@router.get("/my-certificates", response_model=APIResponse[List[CertificateWithCourse]])
def list_my_certificates(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    certificates = certificate_service.list_mine(db, user=current_user)
    return APIResponse(message="Certificates retrieved successfully", data=certificates)

@router.get("/certificates/verify/{certificate_number}", response_model=APIResponse[CertificateVerification])
def verify_certificate(certificate_number: str, db: Session = Depends(deps.get_db)):
    verification = certificate_service.verify(db, certificate_number=certificate_number)
    return APIResponse(message="Certificate verified", data=verification)

@router.post("/certificates/generate", response_model=APIResponse[GeneratedImage], status_code=status.HTTP_201_CREATED)
def generate_certificate_image(
    *,
    db: Session = Depends(deps.get_transactional_db),
    request: CertificateGenerateRequest,
    current_user: User = Depends(deps.get_current_user)
):
    generated = certificate_service.generate_image(db, user=current_user, request=request)
    return APIResponse(message="Certificate image generated", data=generated)

@router.get("/certificates/{certificate_id}", response_model=APIResponse[CertificateWithCourse])
def get_certificate(
    certificate_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    certificate = certificate_service.get_certificate(db, user=current_user, certificate_id=certificate_id)
    return APIResponse(message="Certificate retrieved successfully", data=to_certificate_with_course(certificate))

@router.get("/certificates/{certificate_id}/images", response_model=APIResponse[List[CertificateImage]])
def list_certificate_images(
    certificate_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    images = certificate_service.list_images(db, user=current_user, certificate_id=certificate_id)
    return APIResponse(message="Certificate images retrieved successfully", data=[CertificateImage.model_validate(i) for i in images])

@router.get("/certificates/{certificate_id}/download/{image_id}")
def download_certificate(
    certificate_id: int,
    image_id: int,
    format: CertificateFormatEnum = Query(CertificateFormatEnum.PDF),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user)
):
    content, media_type, filename = certificate_service.download(
        db, user=current_user, certificate_id=certificate_id, image_id=image_id, fmt=format
    )
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

@router.post("/admin/certificates/{certificate_id}/revoke", response_model=APIResponse[Certificate])
def revoke_certificate(
    certificate_id: int,
    db: Session = Depends(deps.get_transactional_db),
    admin: User = Depends(deps.get_current_admin)
):
    certificate = certificate_service.revoke(db, certificate_id=certificate_id)
    return APIResponse(message="Certificate revoked", data=Certificate.model_validate(certificate))
