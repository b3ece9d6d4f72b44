from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from timeledger.api import deps
from timeledger.db.session import get_db
from timeledger.schemas.template import (
    TemplateApply,
    TemplateApplyResult,
    TemplateBlockCreate,
    TemplateBlockPublic,
    TemplateBlockUpdate,
    TemplateCreate,
    TemplateDuplicate,
    TemplatePublic,
    TemplateUpdate,
)
from timeledger.services import templates as templates_service

router = APIRouter()


@router.get("/", response_model=list[TemplatePublic])
def list_templates(
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[TemplatePublic]:
    return templates_service.list_templates(db, owner_id)


@router.get("/{template_id}", response_model=TemplatePublic)
def get_template(
    template_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> TemplatePublic:
    return templates_service.get_template(db, owner_id, template_id)


@router.post("/", response_model=TemplatePublic, status_code=status.HTTP_201_CREATED)
def create_template(
    payload: TemplateCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> TemplatePublic:
    return templates_service.create_template(db, owner_id, payload)


@router.patch("/{template_id}", response_model=TemplatePublic)
def update_template(
    template_id: int,
    payload: TemplateUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> TemplatePublic:
    return templates_service.update_template(db, owner_id, template_id, payload)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> None:
    templates_service.delete_template(db, owner_id, template_id)


@router.post(
    "/{template_id}/blocks",
    response_model=TemplateBlockPublic,
    status_code=status.HTTP_201_CREATED,
)
def add_template_block(
    template_id: int,
    payload: TemplateBlockCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> TemplateBlockPublic:
    return templates_service.add_template_block(db, owner_id, template_id, payload)


@router.patch("/blocks/{block_id}", response_model=TemplateBlockPublic)
def update_template_block(
    block_id: int,
    payload: TemplateBlockUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> TemplateBlockPublic:
    return templates_service.update_template_block(db, owner_id, block_id, payload)


@router.delete("/blocks/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template_block(
    block_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> None:
    templates_service.delete_template_block(db, owner_id, block_id)


@router.post("/{template_id}/duplicate", response_model=TemplatePublic)
def duplicate_template(
    template_id: int,
    payload: TemplateDuplicate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> TemplatePublic:
    return templates_service.duplicate_template(db, owner_id, template_id, payload.name)


@router.post("/{template_id}/apply", response_model=TemplateApplyResult)
def apply_template(
    template_id: int,
    payload: TemplateApply,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> TemplateApplyResult:
    return templates_service.apply_template(
        db, owner_id, template_id, payload.week_start_date
    )
