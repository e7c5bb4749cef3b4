import logging
from typing import Any, List
from uuid import UUID as PyUUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api import deps
from app.core.permissions import PermissionCode
from app.models.user import User as UserModel
from app.schemas.identity import SessionIdentity
from app.schemas.permission import (
    Permission,
    PermissionCheck,
    PermissionModule,
    PermissionToggle,
    PermissionToggleResult,
    UserPermission,
)
from app.services.authorization import authorization_checker
from app.services.permission import permission_service

logger = logging.getLogger(__name__)
router = APIRouter()

manage_permissions = deps.PermissionChecker(PermissionCode.USERS_MANAGE_PERMISSIONS)


@router.get("/", response_model=List[Permission], dependencies=[Depends(manage_permissions)],
            summary="Catálogo de permissões")
def read_permissions(db: Session = Depends(deps.get_db)) -> Any:
    return permission_service.list_catalog(db)


@router.get("/modulos", response_model=List[PermissionModule], dependencies=[Depends(manage_permissions)],
            summary="Módulos de permissão")
def read_modules(db: Session = Depends(deps.get_db)) -> Any:
    return permission_service.list_modules(db)


@router.get("/usuario/{user_id}", response_model=List[UserPermission], dependencies=[Depends(manage_permissions)],
            summary="Permissões de um usuário")
def read_user_permissions(user_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    """Todo o catálogo com `granted` indicando o que o usuário possui."""
    return permission_service.list_for_user(db, user_id)


@router.put("/usuario/{user_id}/{permission_id}", response_model=PermissionToggleResult,
            summary="Conceder ou revogar permissão")
def toggle_user_permission(
    *,
    db: Session = Depends(deps.get_db),
    user_id: PyUUID,
    permission_id: PyUUID,
    toggle_in: PermissionToggle,
    identity: SessionIdentity = Depends(manage_permissions),
) -> Any:
    """
    Operação idempotente: conceder algo já concedido ou revogar algo ausente
    não altera nada.
    """
    try:
        granted = permission_service.toggle(
            db, user_id=user_id, permission_id=permission_id, granted=toggle_in.granted
        )
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Erro ao alterar permissão {permission_id} do usuário {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao alterar a permissão.")
    logger.info(f"Usuário {identity.user_id} definiu permissão {permission_id} de {user_id} como granted={granted}.")
    return {"user_id": user_id, "permission_id": permission_id, "granted": granted}


@router.get("/check/{user_id}/{code}", response_model=PermissionCheck, dependencies=[Depends(manage_permissions)],
            summary="Verificar permissão de um usuário")
def check_user_permission(user_id: PyUUID, code: str, db: Session = Depends(deps.get_db)) -> Any:
    user = db.get(UserModel, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usuário não encontrado.")
    identity = SessionIdentity(
        user_id=user.id,
        role=user.role,
        status=user.status,
        grants=frozenset(permission_service.grants_for(db, user.id)),
    )
    return {"has_permission": authorization_checker.is_allowed(db, identity, code)}
