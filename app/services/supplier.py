import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core import cnpj as cnpj_validator
from app.models.supplier import Supplier
from app.schemas.supplier import SupplierCreate, SupplierUpdate

from .base_service import BaseService

logger = logging.getLogger(__name__)


class SupplierService(BaseService[Supplier, SupplierCreate, SupplierUpdate]):
    display_name = "Fornecedor"

    def get_by_cnpj(self, db: Session, *, cnpj: str) -> Optional[Supplier]:
        result = cnpj_validator.check(cnpj)
        statement = select(self.model).where(self.model.cnpj == result.formatted)
        return db.execute(statement).scalar_one_or_none()

    def get_multi(
        self, db: Session, *, skip: int = 0, limit: int = 100, search: Optional[str] = None
    ) -> List[Supplier]:
        statement = select(self.model)
        if search:
            statement = statement.where(self.model.name.ilike(f"%{search}%"))
        statement = statement.order_by(self.model.name).offset(skip).limit(limit)
        return list(db.execute(statement).scalars().all())

    def create(self, db: Session, *, obj_in: SupplierCreate) -> Supplier:
        if obj_in.cnpj and self.get_by_cnpj(db, cnpj=obj_in.cnpj):
            logger.warning(f"Tentativa de cadastrar fornecedor com CNPJ duplicado: {obj_in.cnpj}")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Já existe um fornecedor com esse CNPJ.")
        create_data = obj_in.model_dump()
        create_data["status"] = obj_in.status.value
        db_obj = self.model(**create_data)
        db.add(db_obj)
        logger.info(f"Fornecedor '{db_obj.name}' preparado para criação.")
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: Supplier,
        obj_in: Union[SupplierUpdate, Dict[str, Any]]
    ) -> Supplier:
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        new_cnpj = update_data.get("cnpj")
        if new_cnpj and new_cnpj != db_obj.cnpj:
            existing = self.get_by_cnpj(db, cnpj=new_cnpj)
            if existing and existing.id != db_obj.id:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Já existe um fornecedor com esse CNPJ.")
        if update_data.get("status") is not None:
            update_data["status"] = getattr(update_data["status"], "value", update_data["status"])
        return super().update(db, db_obj=db_obj, obj_in=update_data)

supplier_service = SupplierService(Supplier)
