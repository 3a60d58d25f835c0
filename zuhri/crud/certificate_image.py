from typing import List
from sqlalchemy.orm import Session

from zuhri.crud.base import CRUDBase
from zuhri.models.certificate_image import CertificateImage

class CRUDCertificateImage(CRUDBase[CertificateImage, None, None]):
    def get_by_certificate(self, db: Session, *, certificate_id: int) -> List[CertificateImage]:
        return (
            db.query(CertificateImage)
            .filter(CertificateImage.certificate_id == certificate_id)
            .order_by(CertificateImage.generated_at.desc(), CertificateImage.id.desc())
            .all()
        )

certificate_image = CRUDCertificateImage(CertificateImage)
