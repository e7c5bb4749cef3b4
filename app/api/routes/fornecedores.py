import logging
from typing import Any, List, Optional
from uuid import UUID as PyUUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.api import deps
from app.core.permissions import PermissionCode
from app.schemas.common import Msg
from app.schemas.identity import SessionIdentity
from app.schemas.supplier import Supplier, SupplierCreate, SupplierUpdate
from app.services.supplier import supplier_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/",
             response_model=Supplier,
             status_code=status.HTTP_201_CREATED,
             summary="Cadastrar fornecedor")
def create_supplier(
    *,
    db: Session = Depends(deps.get_db),
    supplier_in: SupplierCreate,
    identity: SessionIdentity = Depends(deps.PermissionChecker(PermissionCode.SUPPLIERS_CREATE)),
) -> Any:
    """
    Cadastra um fornecedor. O CNPJ é opcional; quando informado passa pela
    mesma validação dos clientes.
    """
    logger.info(f"Cadastro do fornecedor '{supplier_in.name}' pelo usuário {identity.user_id}")
    try:
        supplier = supplier_service.create(db=db, obj_in=supplier_in)
        db.commit()
        db.refresh(supplier)
        return supplier
    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Erro inesperado ao cadastrar fornecedor '{supplier_in.name}': {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao cadastrar o fornecedor.")


@router.get("/",
            response_model=List[Supplier],
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.SUPPLIERS_VIEW))],
            summary="Listar fornecedores")
def read_suppliers(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
    search: Optional[str] = None,
) -> Any:
    return supplier_service.get_multi(db, skip=skip, limit=limit, search=search)


@router.get("/{supplier_id}",
            response_model=Supplier,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.SUPPLIERS_VIEW))],
            summary="Obter fornecedor")
def read_supplier(supplier_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    return supplier_service.get_or_404(db, id=supplier_id)


@router.put("/{supplier_id}",
            response_model=Supplier,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.SUPPLIERS_EDIT))],
            summary="Atualizar fornecedor")
def update_supplier(
    *,
    db: Session = Depends(deps.get_db),
    supplier_id: PyUUID,
    supplier_in: SupplierUpdate,
) -> Any:
    supplier = supplier_service.get_or_404(db, id=supplier_id)
    try:
        supplier = supplier_service.update(db=db, db_obj=supplier, obj_in=supplier_in)
        db.commit()
        db.refresh(supplier)
        return supplier
    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Erro inesperado ao atualizar fornecedor {supplier_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao atualizar o fornecedor.")


@router.delete("/{supplier_id}",
               response_model=Msg,
               dependencies=[Depends(deps.PermissionChecker(PermissionCode.SUPPLIERS_DELETE))],
               summary="Remover fornecedor")
def delete_supplier(supplier_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    supplier = supplier_service.remove(db=db, id=supplier_id)
    db.commit()
    logger.info(f"Fornecedor '{supplier.name}' (ID: {supplier_id}) removido.")
    return {"msg": "Fornecedor removido com sucesso."}
