import logging
from typing import Any, List
from uuid import UUID as PyUUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.api import deps
from app.core.permissions import PermissionCode
from app.models.user import User as UserModel
from app.schemas.user import User, UserCreate, UserStatusUpdate, UserWithPermissions
from app.services.permission import permission_service
from app.services.user import user_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/me", response_model=UserWithPermissions, summary="Usuário autenticado")
def read_user_me(
    db: Session = Depends(deps.get_db),
    current_user: UserModel = Depends(deps.get_current_active_user),
) -> Any:
    """Dados do usuário corrente e os códigos de permissão que ele possui."""
    user_data = User.model_validate(current_user).model_dump()
    user_data["permissions"] = sorted(permission_service.grants_for(db, current_user.id))
    return user_data


@router.get(
    "/",
    response_model=List[User],
    dependencies=[Depends(deps.PermissionChecker(PermissionCode.USERS_VIEW))],
    summary="Listar usuários",
)
def read_users(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
) -> Any:
    return user_service.get_multi(db, skip=skip, limit=limit)


@router.post(
    "/",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(deps.PermissionChecker(PermissionCode.USERS_CREATE))],
    summary="Criar usuário",
)
def create_user(
    *,
    db: Session = Depends(deps.get_db),
    user_in: UserCreate,
    current_user: UserModel = Depends(deps.get_current_active_user),
) -> Any:
    """
    Cria um usuário. Nenhuma permissão é concedida automaticamente.
    """
    logger.info(f"Criação do usuário '{user_in.email}' solicitada por '{current_user.email}'")
    try:
        user = user_service.create(db=db, obj_in=user_in)
        db.commit()
        db.refresh(user)
        logger.info(f"Usuário '{user.email}' (ID: {user.id}) criado.")
        return user
    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Erro inesperado ao criar usuário '{user_in.email}': {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao criar o usuário.")


@router.patch(
    "/{user_id}/status",
    response_model=User,
    dependencies=[Depends(deps.PermissionChecker(PermissionCode.USERS_EDIT))],
    summary="Ativar ou desativar usuário",
)
def update_user_status(
    *,
    db: Session = Depends(deps.get_db),
    user_id: PyUUID,
    status_in: UserStatusUpdate,
    current_user: UserModel = Depends(deps.get_current_active_user),
) -> Any:
    user = user_service.get_or_404(db, id=user_id)
    if user.id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Não é possível alterar o próprio status.")
    user_service.set_status(db, user=user, new_status=status_in.status)
    db.commit()
    db.refresh(user)
    return user
