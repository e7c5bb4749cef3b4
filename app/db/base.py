from typing import TypeVar

from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import MetaData

convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Sem schema fixo: as tabelas vivem no search_path padrão da conexão
metadata = MetaData(naming_convention=convention)

class Base(DeclarativeBase):
    """
    Classe base para todos os modelos ORM do SQLAlchemy.
    """
    metadata = metadata

ModelType = TypeVar("ModelType", bound=Base)
