import logging
from typing import Any, List, Optional
from uuid import UUID as PyUUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.api import deps
from app.core.permissions import PermissionCode
from app.schemas.client import Client, ClientCreate, ClientUpdate
from app.schemas.common import Msg
from app.schemas.identity import SessionIdentity
from app.services.client import client_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/",
             response_model=Client,
             status_code=status.HTTP_201_CREATED,
             summary="Cadastrar cliente")
def create_client(
    *,
    db: Session = Depends(deps.get_db),
    client_in: ClientCreate,
    identity: SessionIdentity = Depends(deps.PermissionChecker(PermissionCode.CLIENTS_CREATE)),
) -> Any:
    """
    Cadastra um cliente. CNPJ inválido é rejeitado na validação (422) e o
    valor gravado é sempre o formatado.
    """
    logger.info(f"Cadastro do cliente '{client_in.name}' ({client_in.cnpj}) pelo usuário {identity.user_id}")
    try:
        client = client_service.create(db=db, obj_in=client_in)
        db.commit()
        db.refresh(client)
        return client
    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Erro inesperado ao cadastrar cliente '{client_in.name}': {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao cadastrar o cliente.")


@router.get("/",
            response_model=List[Client],
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.CLIENTS_VIEW))],
            summary="Listar clientes")
def read_clients(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
    search: Optional[str] = None,
) -> Any:
    return client_service.get_multi(db, skip=skip, limit=limit, search=search)


@router.get("/{client_id}",
            response_model=Client,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.CLIENTS_VIEW))],
            summary="Obter cliente")
def read_client(client_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    return client_service.get_or_404(db, id=client_id)


@router.put("/{client_id}",
            response_model=Client,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.CLIENTS_EDIT))],
            summary="Atualizar cliente")
def update_client(
    *,
    db: Session = Depends(deps.get_db),
    client_id: PyUUID,
    client_in: ClientUpdate,
) -> Any:
    client = client_service.get_or_404(db, id=client_id)
    try:
        client = client_service.update(db=db, db_obj=client, obj_in=client_in)
        db.commit()
        db.refresh(client)
        return client
    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Erro inesperado ao atualizar cliente {client_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao atualizar o cliente.")


@router.delete("/{client_id}",
               response_model=Msg,
               dependencies=[Depends(deps.PermissionChecker(PermissionCode.CLIENTS_DELETE))],
               summary="Remover cliente")
def delete_client(client_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    try:
        client = client_service.remove(db=db, id=client_id)
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise
    logger.info(f"Cliente '{client.name}' (ID: {client_id}) removido.")
    return {"msg": "Cliente removido com sucesso."}
