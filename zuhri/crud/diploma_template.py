from typing import List, Optional
from sqlalchemy.orm import Session

from zuhri.crud.base import CRUDBase
from zuhri.models.diploma_template import DiplomaTemplate
from zuhri.schemas.diploma_template import DiplomaTemplateCreate, DiplomaTemplateUpdate

class CRUDDiplomaTemplate(CRUDBase[DiplomaTemplate, DiplomaTemplateCreate, DiplomaTemplateUpdate]):
    def get_active(self, db: Session) -> List[DiplomaTemplate]:
        return (
            db.query(DiplomaTemplate)
            .filter(DiplomaTemplate.is_active == True)
            .order_by(DiplomaTemplate.id)
            .all()
        )

    def get_all(self, db: Session) -> List[DiplomaTemplate]:
        return db.query(DiplomaTemplate).order_by(DiplomaTemplate.id).all()

    def get_active_by_level(self, db: Session, *, level: str) -> Optional[DiplomaTemplate]:
        return (
            db.query(DiplomaTemplate)
            .filter(DiplomaTemplate.level == level, DiplomaTemplate.is_active == True)
            .order_by(DiplomaTemplate.updated_at.desc(), DiplomaTemplate.id.desc())
            .first()
        )

    def hard_delete(self, db: Session, *, db_obj: DiplomaTemplate) -> None:
        db.delete(db_obj)
        db.flush()

diploma_template = CRUDDiplomaTemplate(DiplomaTemplate)
