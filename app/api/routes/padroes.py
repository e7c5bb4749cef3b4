import logging
from typing import Any, List, Optional
from uuid import UUID as PyUUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api import deps
from app.core.permissions import PermissionCode
from app.schemas.common import Msg
from app.schemas.enums import ValidityStatus
from app.schemas.standard import Standard, StandardCreate, StandardUpdate
from app.services.standard import standard_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/",
             response_model=Standard,
             status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(deps.PermissionChecker(PermissionCode.STANDARDS_CREATE))],
             summary="Cadastrar padrão")
def create_standard(*, db: Session = Depends(deps.get_db), standard_in: StandardCreate) -> Any:
    try:
        standard = standard_service.create(db=db, obj_in=standard_in)
        db.commit()
        db.refresh(standard)
        return standard_service.stamp(standard)
    except Exception as e:
        db.rollback()
        logger.error(f"Erro ao cadastrar padrão '{standard_in.name}': {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao cadastrar o padrão.")


@router.get("/",
            response_model=List[Standard],
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.STANDARDS_VIEW))],
            summary="Listar padrões")
def read_standards(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
    status_filter: Optional[ValidityStatus] = Query(None, alias="status"),
) -> Any:
    return standard_service.get_multi(db, skip=skip, limit=limit, status_filter=status_filter)


@router.get("/{standard_id}",
            response_model=Standard,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.STANDARDS_VIEW))],
            summary="Obter padrão")
def read_standard(standard_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    return standard_service.get_or_404(db, id=standard_id)


@router.put("/{standard_id}",
            response_model=Standard,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.STANDARDS_EDIT))],
            summary="Atualizar padrão")
def update_standard(
    *,
    db: Session = Depends(deps.get_db),
    standard_id: PyUUID,
    standard_in: StandardUpdate,
) -> Any:
    standard = standard_service.get_or_404(db, id=standard_id)
    standard = standard_service.update(db=db, db_obj=standard, obj_in=standard_in)
    db.commit()
    db.refresh(standard)
    return standard_service.stamp(standard)


@router.delete("/{standard_id}",
               response_model=Msg,
               dependencies=[Depends(deps.PermissionChecker(PermissionCode.STANDARDS_DELETE))],
               summary="Remover padrão")
def delete_standard(standard_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    standard_service.remove(db=db, id=standard_id)
    db.commit()
    return {"msg": "Padrão removido com sucesso."}
