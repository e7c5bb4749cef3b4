import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
from uuid import UUID

from fastapi import HTTPException, status
from pydantic import BaseModel

from sqlalchemy.orm import Session
from sqlalchemy import func, select

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)

class BaseService(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    # Nome exibido nas mensagens de erro (ex.: "Cliente")
    display_name: str = "Registro"

    def __init__(self, model: Type[ModelType]):
        """
        Serviço base com operações CRUD padrão.
        Os métodos de escrita NÃO fazem commit; isso fica a cargo da rota.

        **Parâmetros**

        * `model`: classe do modelo SQLAlchemy
        """
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def get_or_404(self, db: Session, id: Any) -> ModelType:
        """Obtém um registro pelo ID ou levanta 404."""
        db_obj = self.get(db, id=id)
        if not db_obj:
            logger.warning(f"Registro não encontrado em {self.model.__name__} com ID: {id}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.display_name} com ID {id} não encontrado."
            )
        return db_obj

    def get_multi(
        self, db: Session, *, skip: int = 0, limit: int = 100
    ) -> List[ModelType]:
        statement = select(self.model).offset(skip).limit(limit)
        return list(db.execute(statement).scalars().all())

    def get_count(self, db: Session) -> int:
        count_query = select(func.count(self.model.id)) # type: ignore[attr-defined]
        count = db.execute(count_query).scalar_one_or_none()
        return count or 0

    def create(self, db: Session, *, obj_in: CreateSchemaType) -> ModelType:
        """
        Cria um novo registro.
        NÃO faz db.commit().
        """
        obj_in_data = obj_in.model_dump()
        db_obj = self.model(**obj_in_data)
        db.add(db_obj)
        logger.info(f"Novo registro preparado em {self.model.__name__} com dados: {obj_in_data}")
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """
        Atualiza um objeto existente.
        NÃO faz db.commit().
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            # exclude_unset para não sobrescrever com None campos não enviados
            update_data = obj_in.model_dump(exclude_unset=True)

        obj_id = getattr(db_obj, 'id', 'N/A')
        logger.debug(f"Atualizando {self.model.__name__} ID {obj_id} com dados: {update_data}")

        if not update_data:
            logger.info(f"Nenhum dado para atualizar em {self.model.__name__} (ID: {obj_id})")
            return db_obj

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
            else:
                logger.warning(f"Tentativa de atualizar campo inexistente '{field}' em {self.model.__name__}")

        db.add(db_obj)
        logger.info(f"Registro preparado para atualização em {self.model.__name__} (ID: {obj_id})")
        return db_obj

    def remove(self, db: Session, *, id: Union[UUID, int]) -> ModelType:
        """
        Remove um registro pelo ID.
        NÃO faz db.commit().
        """
        obj = self.get_or_404(db, id=id)
        db.delete(obj)
        logger.warning(f"Registro preparado para remoção em {self.model.__name__} (ID: {id})")
        return obj
