import logging
from typing import Any, List, Optional
from uuid import UUID as PyUUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.api import deps
from app.core.permissions import PermissionCode
from app.schemas.certificate import Certificate, CertificateCreate, CertificateUpdate
from app.schemas.common import Msg
from app.schemas.enums import ValidityStatus
from app.schemas.identity import SessionIdentity
from app.services.certificate import certificate_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/",
             response_model=Certificate,
             status_code=status.HTTP_201_CREATED,
             summary="Emitir certificado")
def create_certificate(
    *,
    db: Session = Depends(deps.get_db),
    certificate_in: CertificateCreate,
    identity: SessionIdentity = Depends(deps.PermissionChecker(PermissionCode.CERTIFICATES_CREATE)),
) -> Any:
    """
    Registra um certificado de calibração. O status é calculado a partir do
    vencimento; qualquer valor enviado pelo cliente é ignorado.
    """
    logger.info(f"Registro do certificado '{certificate_in.certificate_number}' pelo usuário {identity.user_id}")
    try:
        certificate = certificate_service.create(db=db, obj_in=certificate_in)
        db.commit()
        db.refresh(certificate)
        return certificate_service.stamp(certificate)
    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Erro inesperado ao registrar certificado '{certificate_in.certificate_number}': {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao registrar o certificado.")


@router.get("/",
            response_model=List[Certificate],
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.CERTIFICATES_VIEW))],
            summary="Listar certificados")
def read_certificates(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
    status_filter: Optional[ValidityStatus] = Query(None, alias="status", description="Filtra pela validade calculada hoje"),
) -> Any:
    return certificate_service.get_multi(db, skip=skip, limit=limit, status_filter=status_filter)


@router.get("/{certificate_id}",
            response_model=Certificate,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.CERTIFICATES_VIEW))],
            summary="Obter certificado")
def read_certificate(certificate_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    return certificate_service.get_or_404(db, id=certificate_id)


@router.put("/{certificate_id}",
            response_model=Certificate,
            dependencies=[Depends(deps.PermissionChecker(PermissionCode.CERTIFICATES_EDIT))],
            summary="Atualizar certificado")
def update_certificate(
    *,
    db: Session = Depends(deps.get_db),
    certificate_id: PyUUID,
    certificate_in: CertificateUpdate,
) -> Any:
    certificate = certificate_service.get_or_404(db, id=certificate_id)
    try:
        certificate = certificate_service.update(db=db, db_obj=certificate, obj_in=certificate_in)
        db.commit()
        db.refresh(certificate)
        return certificate_service.stamp(certificate)
    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Erro inesperado ao atualizar certificado {certificate_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno ao atualizar o certificado.")


@router.delete("/{certificate_id}",
               response_model=Msg,
               dependencies=[Depends(deps.PermissionChecker(PermissionCode.CERTIFICATES_DELETE))],
               summary="Remover certificado")
def delete_certificate(certificate_id: PyUUID, db: Session = Depends(deps.get_db)) -> Any:
    certificate_service.remove(db=db, id=certificate_id)
    db.commit()
    logger.info(f"Certificado {certificate_id} removido.")
    return {"msg": "Certificado removido com sucesso."}
