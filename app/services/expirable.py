import logging
from datetime import date
from typing import Any, Dict, List, Optional, TypeVar, Union

from sqlalchemy import false, select
from sqlalchemy.orm import Session

from app.core import validity
from app.schemas.enums import ValidityStatus

from .base_service import BaseService, CreateSchemaType, UpdateSchemaType, ModelType

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ExpirableService(BaseService[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Base para entidades com data de vencimento (certificados, padrões, documentos).

    O `status` é carimbado pelo classificador em toda leitura e escrita, então
    o valor devolvido sempre corresponde à data de hoje. Filtros por status
    consultam a coluna de data, nunca a coluna `status` persistida.
    """
    # Nome da coluna que guarda o vencimento
    expiration_field: str = "expiration_date"

    def __init__(self, model, warning_window_days: Optional[int] = None):
        super().__init__(model)
        self.warning_window_days = warning_window_days

    def _expiration_column(self):
        return getattr(self.model, self.expiration_field)

    def stamp(self, db_obj: T, reference_date: Optional[date] = None) -> T:
        """Recalcula o status de um objeto em relação à data de referência."""
        reference = reference_date or validity.today()
        new_status = validity.classify(
            reference, getattr(db_obj, self.expiration_field), self.warning_window_days
        )
        if getattr(db_obj, "status", None) != new_status.value:
            db_obj.status = new_status.value
        return db_obj

    def get_or_404(self, db: Session, id: Any) -> ModelType:
        return self.stamp(super().get_or_404(db, id))

    def get_multi(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        status_filter: Optional[ValidityStatus] = None,
        reference_date: Optional[date] = None,
    ) -> List[ModelType]:
        reference = reference_date or validity.today()
        column = self._expiration_column()
        statement = select(self.model)

        if status_filter == ValidityStatus.SEM_VALIDADE:
            statement = statement.where(column.is_(None))
        elif status_filter == ValidityStatus.DATA_INVALIDA:
            # Colunas Date só guardam datas válidas
            statement = statement.where(false())
        elif status_filter is not None:
            after, up_to = validity.date_bounds_for_status(status_filter, reference, self.warning_window_days)
            if after is not None:
                statement = statement.where(column > after)
            if up_to is not None:
                statement = statement.where(column <= up_to)

        statement = statement.order_by(column.asc().nulls_last()).offset(skip).limit(limit)
        items = list(db.execute(statement).scalars().unique().all())
        return [self.stamp(item, reference) for item in items]

    def create(self, db: Session, *, obj_in: CreateSchemaType) -> ModelType:
        db_obj = self.model(**obj_in.model_dump())
        self.stamp(db_obj)
        db.add(db_obj)
        logger.info(f"{self.model.__name__} preparado para criação com status '{db_obj.status}'.")
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        # Status nunca vem de fora
        update_data.pop("status", None)
        updated = super().update(db, db_obj=db_obj, obj_in=update_data)
        return self.stamp(updated)

    def refresh_statuses(self, db: Session, *, reference_date: Optional[date] = None) -> int:
        """
        Regrava o status persistido de todos os registros defasados.
        Retorna quantos foram alterados. NÃO faz commit.
        """
        reference = reference_date or validity.today()
        changed = 0
        for db_obj in db.execute(select(self.model)).scalars().unique().all():
            before = db_obj.status
            self.stamp(db_obj, reference)
            if db_obj.status != before:
                changed += 1
        if changed:
            logger.info(f"{changed} registro(s) de {self.model.__name__} com status recalculado.")
        return changed
