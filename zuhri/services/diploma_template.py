import logging
from typing import List
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from zuhri.core.config import settings
from zuhri.core.constants import DIPLOMA_LEVELS
from zuhri.crud.diploma_template import diploma_template as crud_diploma_template
from zuhri.models.certificate import Certificate
from zuhri.models.diploma_template import DiplomaTemplate
from zuhri.schemas.diploma_template import DiplomaTemplateCreate, DiplomaTemplateUpdate, DiplomaLevel

logger = logging.getLogger(__name__)

class DiplomaTemplateService:
    def list_levels(self) -> List[DiplomaLevel]:
        return [DiplomaLevel(**row) for row in DIPLOMA_LEVELS]

    def list_active(self, db: Session) -> List[DiplomaTemplate]:
        return crud_diploma_template.get_active(db)

    def list_all(self, db: Session) -> List[DiplomaTemplate]:
        return crud_diploma_template.get_all(db)

    def get_template(self, db: Session, template_id: int) -> DiplomaTemplate:
        template = crud_diploma_template.get_any(db, id=template_id)
        if not template:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Diploma template not found.")
        return template

    def create_template(self, db: Session, *, template_in: DiplomaTemplateCreate) -> DiplomaTemplate:
        data = template_in.model_dump(mode="json")
        data["institution_name"] = data.get("institution_name") or settings.INSTITUTION_NAME
        template = crud_diploma_template.create(db, obj_in=data, is_active=True)
        logger.info(f"Diploma template {template.id} created for level {template.level}")
        return template

    def update_template(self, db: Session, *, template_id: int, template_in: DiplomaTemplateUpdate) -> DiplomaTemplate:
        template = self.get_template(db, template_id)
        return crud_diploma_template.update(db, db_obj=template, obj_in=template_in)

    def toggle_template(self, db: Session, *, template_id: int) -> DiplomaTemplate:
        template = self.get_template(db, template_id)
        return crud_diploma_template.update(db, db_obj=template, obj_in={"is_active": not template.is_active})

    def delete_template(self, db: Session, *, template_id: int) -> None:
        template = self.get_template(db, template_id)
        # Issued certificates keep their data; they just lose the template link.
        db.query(Certificate).filter(Certificate.diploma_template_id == template.id).update(
            {Certificate.diploma_template_id: None}, synchronize_session=False
        )
        crud_diploma_template.hard_delete(db, db_obj=template)
        db.commit()
        logger.info(f"Diploma template {template_id} deleted")

diploma_template_service = DiplomaTemplateService()
