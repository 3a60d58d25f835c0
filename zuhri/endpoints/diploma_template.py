from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zuhri.models.user import User
from zuhri.schemas.diploma_template import (
    DiplomaTemplate,
    DiplomaTemplateCreate,
    DiplomaTemplateUpdate,
    DiplomaLevel,
)
from zuhri.schemas.response import APIResponse
from zuhri.services.diploma_template import diploma_template_service
from zuhri.utils import deps

router = APIRouter()

@router.get("/diploma-levels", response_model=APIResponse[List[DiplomaLevel]])
def list_diploma_levels():
    return APIResponse(message="Diploma levels retrieved successfully", data=diploma_template_service.list_levels())

@router.get("/diploma-templates", response_model=APIResponse[List[DiplomaTemplate]])
def list_diploma_templates(db: Session = Depends(deps.get_db)):
    templates = diploma_template_service.list_active(db)
    return APIResponse(message="Diploma templates retrieved successfully", data=[DiplomaTemplate.model_validate(t) for t in templates])

@router.get("/diploma-templates/{template_id}", response_model=APIResponse[DiplomaTemplate])
def get_diploma_template(template_id: int, db: Session = Depends(deps.get_db)):
    template = diploma_template_service.get_template(db, template_id)
    return APIResponse(message="Diploma template retrieved successfully", data=DiplomaTemplate.model_validate(template))

@router.get("/admin/diploma-templates", response_model=APIResponse[List[DiplomaTemplate]])
def list_all_diploma_templates(
    db: Session = Depends(deps.get_db),
    admin: User = Depends(deps.get_current_admin)
):
    templates = diploma_template_service.list_all(db)
    return APIResponse(message="Diploma templates retrieved successfully", data=[DiplomaTemplate.model_validate(t) for t in templates])

@router.post("/admin/diploma-templates", response_model=APIResponse[DiplomaTemplate], status_code=status.HTTP_201_CREATED)
def create_diploma_template(
    *,
    db: Session = Depends(deps.get_transactional_db),
    template_in: DiplomaTemplateCreate,
    admin: User = Depends(deps.get_current_admin)
):
    template = diploma_template_service.create_template(db, template_in=template_in)
    return APIResponse(message="Diploma template created successfully", data=DiplomaTemplate.model_validate(template))

@router.patch("/admin/diploma-templates/{template_id}", response_model=APIResponse[DiplomaTemplate])
def update_diploma_template(
    *,
    db: Session = Depends(deps.get_transactional_db),
    template_id: int,
    template_in: DiplomaTemplateUpdate,
    admin: User = Depends(deps.get_current_admin)
):
    template = diploma_template_service.update_template(db, template_id=template_id, template_in=template_in)
    return APIResponse(message="Diploma template updated successfully", data=DiplomaTemplate.model_validate(template))

@router.post("/admin/diploma-templates/{template_id}/toggle", response_model=APIResponse[DiplomaTemplate])
def toggle_diploma_template(
    template_id: int,
    db: Session = Depends(deps.get_transactional_db),
    admin: User = Depends(deps.get_current_admin)
):
    template = diploma_template_service.toggle_template(db, template_id=template_id)
    return APIResponse(message="Diploma template status updated", data=DiplomaTemplate.model_validate(template))

@router.delete("/admin/diploma-templates/{template_id}", response_model=APIResponse[None])
def delete_diploma_template(
    template_id: int,
    db: Session = Depends(deps.get_transactional_db),
    admin: User = Depends(deps.get_current_admin)
):
    diploma_template_service.delete_template(db, template_id=template_id)
    return APIResponse(message="Diploma template deleted successfully")
