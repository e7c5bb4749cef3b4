import logging
from typing import Any, List, Optional
from uuid import UUID as PyUUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api import deps
from app.core.permissions import PermissionCode
from app.schemas.common import Msg
from app.schemas.document import Document, DocumentCreate, DocumentUpdate
from app.schemas.enums import ValidityStatus
from app.services.document import document_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/",
             response_model=Document,
             status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(deps.PermissionChecker(PermissionCode.DOCUMENTS_CREATE))],
             summary="Cadastrar documento")
def create_document(*, db: Session = Depends(deps.get_db), document_in: DocumentCreate) -> Any:
    """Cadastra um documento; a validade segue `next_review_date`."""
    try:
        document = document_service.create(db=db, obj_in=document_in)
        db.commit()
        db.refresh(document)
        return document_service.stamp(document)
    except Exception as e:
        db.rollback()
        logger.error(f"Erro ao cadastrar documento '{document_in.title}': {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao cadastrar o documento.")


@router.get("/",
            response_model=List[Document],
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.DOCUMENTS_VIEW))],
            summary="Listar documentos")
def read_documents(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
    status_filter: Optional[ValidityStatus] = Query(None, alias="status"),
) -> Any:
    return document_service.get_multi(db, skip=skip, limit=limit, status_filter=status_filter)


@router.get("/{document_id}",
            response_model=Document,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.DOCUMENTS_VIEW))],
            summary="Obter documento")
def read_document(document_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    return document_service.get_or_404(db, id=document_id)


@router.put("/{document_id}",
            response_model=Document,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.DOCUMENTS_EDIT))],
            summary="Atualizar documento")
def update_document(
    *,
    db: Session = Depends(deps.get_db),
    document_id: PyUUID,
    document_in: DocumentUpdate,
) -> Any:
    document = document_service.get_or_404(db, id=document_id)
    document = document_service.update(db=db, db_obj=document, obj_in=document_in)
    db.commit()
    db.refresh(document)
    return document_service.stamp(document)


@router.delete("/{document_id}",
               response_model=Msg,
               dependencies=[Depends(deps.PermissionChecker(PermissionCode.DOCUMENTS_DELETE))],
               summary="Remover documento")
def delete_document(document_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    document_service.remove(db=db, id=document_id)
    db.commit()
    return {"msg": "Documento removido com sucesso."}
