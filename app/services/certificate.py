import logging
from typing import Any, Dict, Optional, Union

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.certificate import Certificate
from app.models.client import Client
from app.schemas.certificate import CertificateCreate, CertificateUpdate

from .expirable import ExpirableService

logger = logging.getLogger(__name__)


class CertificateService(ExpirableService[Certificate, CertificateCreate, CertificateUpdate]):
    display_name = "Certificado"

    def get_by_number(self, db: Session, *, certificate_number: str) -> Optional[Certificate]:
        statement = select(self.model).where(self.model.certificate_number == certificate_number)
        return db.execute(statement).scalars().unique().one_or_none()

    def _ensure_client(self, db: Session, client_id: Any) -> None:
        if db.get(Client, client_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Cliente com ID {client_id} não encontrado.")

    def create(self, db: Session, *, obj_in: CertificateCreate) -> Certificate:
        if self.get_by_number(db, certificate_number=obj_in.certificate_number):
            logger.warning(f"Número de certificado duplicado: {obj_in.certificate_number}")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Já existe um certificado com esse número.")
        self._ensure_client(db, obj_in.client_id)
        return super().create(db, obj_in=obj_in)

    def update(
        self,
        db: Session,
        *,
        db_obj: Certificate,
        obj_in: Union[CertificateUpdate, Dict[str, Any]]
    ) -> Certificate:
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)

        number = update_data.get("certificate_number")
        if number and number != db_obj.certificate_number:
            existing = self.get_by_number(db, certificate_number=number)
            if existing and existing.id != db_obj.id:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Já existe um certificado com esse número.")
        if update_data.get("client_id") and update_data["client_id"] != db_obj.client_id:
            self._ensure_client(db, update_data["client_id"])

        calibration = update_data.get("calibration_date", db_obj.calibration_date)
        expiration = update_data.get("expiration_date", db_obj.expiration_date)
        if expiration is not None and calibration is not None and expiration < calibration:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="A data de vencimento não pode ser anterior à data de calibração.",
            )
        return super().update(db, db_obj=db_obj, obj_in=update_data)

certificate_service = CertificateService(Certificate)
