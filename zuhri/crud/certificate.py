from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from zuhri.crud.base import CRUDBase
from zuhri.models.certificate import Certificate

class CRUDCertificate(CRUDBase[Certificate, None, None]):
    def get_by_number(self, db: Session, *, certificate_number: str) -> Optional[Certificate]:
        return (
            db.query(Certificate)
            .options(selectinload(Certificate.course))
            .filter(Certificate.certificate_number == certificate_number)
            .first()
        )

    def get_by_attempt(self, db: Session, *, exam_attempt_id: int) -> Optional[Certificate]:
        return db.query(Certificate).filter(Certificate.exam_attempt_id == exam_attempt_id).first()

    def get_valid_by_user(self, db: Session, *, user_id: int) -> List[Certificate]:
        return (
            db.query(Certificate)
            .options(selectinload(Certificate.course))
            .filter(Certificate.user_id == user_id, Certificate.is_valid == True)
            .order_by(Certificate.issued_at.desc(), Certificate.id.desc())
            .all()
        )

    def count_valid_by_user(self, db: Session, *, user_id: int) -> int:
        return (
            db.query(Certificate)
            .filter(Certificate.user_id == user_id, Certificate.is_valid == True)
            .count()
        )

certificate = CRUDCertificate(Certificate)
