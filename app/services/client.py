import logging
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.core import cnpj as cnpj_validator
from app.models.certificate import Certificate
from app.models.client import Client
from app.schemas.client import ClientCreate, ClientUpdate

from .base_service import BaseService

logger = logging.getLogger(__name__)


class ClientService(BaseService[Client, ClientCreate, ClientUpdate]):
    """
    Cadastro de clientes. O CNPJ chega já validado e formatado pelo schema;
    aqui só se garante a unicidade.
    """
    display_name = "Cliente"

    def get_by_cnpj(self, db: Session, *, cnpj: str) -> Optional[Client]:
        result = cnpj_validator.check(cnpj)
        statement = select(self.model).where(self.model.cnpj == result.formatted)
        return db.execute(statement).scalar_one_or_none()

    def get_multi(
        self, db: Session, *, skip: int = 0, limit: int = 100, search: Optional[str] = None
    ) -> List[Client]:
        statement = select(self.model)
        if search:
            term = f"%{search}%"
            statement = statement.where(
                or_(self.model.name.ilike(term), self.model.email.ilike(term), self.model.cnpj.ilike(term))
            )
        statement = statement.order_by(self.model.name).offset(skip).limit(limit)
        return list(db.execute(statement).scalars().all())

    def create(self, db: Session, *, obj_in: ClientCreate) -> Client:
        if self.get_by_cnpj(db, cnpj=obj_in.cnpj):
            logger.warning(f"Tentativa de cadastrar cliente com CNPJ duplicado: {obj_in.cnpj}")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Já existe um cliente com esse CNPJ.")
        create_data = obj_in.model_dump()
        create_data["status"] = obj_in.status.value
        db_obj = self.model(**create_data)
        db.add(db_obj)
        logger.info(f"Cliente '{db_obj.name}' ({db_obj.cnpj}) preparado para criação.")
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: Client,
        obj_in: Union[ClientUpdate, Dict[str, Any]]
    ) -> Client:
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        if "cnpj" in update_data:
            if update_data["cnpj"] is None:
                raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="O CNPJ do cliente é obrigatório.")
            if update_data["cnpj"] != db_obj.cnpj:
                existing = self.get_by_cnpj(db, cnpj=update_data["cnpj"])
                if existing and existing.id != db_obj.id:
                    raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Já existe um cliente com esse CNPJ.")
        if update_data.get("status") is not None:
            update_data["status"] = getattr(update_data["status"], "value", update_data["status"])
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def remove(self, db: Session, *, id: UUID) -> Client:
        db_obj = self.get_or_404(db, id=id)
        has_certificates = db.execute(
            select(Certificate.id).where(Certificate.client_id == id).limit(1)
        ).first()
        if has_certificates:
            logger.warning(f"Tentativa de remover cliente {id} com certificados vinculados.")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="O cliente possui certificados vinculados e não pode ser removido.",
            )
        db.delete(db_obj)
        logger.warning(f"Cliente '{db_obj.name}' (ID: {id}) preparado para remoção.")
        return db_obj

client_service = ClientService(Client)
