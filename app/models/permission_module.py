from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.db.base import Base

if TYPE_CHECKING:
    from .permission import Permission


class PermissionModule(Base):
    """
    Agrupamento de permissões para exibição. O id é um identificador estável (ex: 'certificates').
    """
    __tablename__ = "permission_modules"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    permissions: Mapped[List["Permission"]] = relationship(
        "Permission",
        back_populates="module"
    )

    def __repr__(self) -> str:
        return f"<PermissionModule(id='{self.id}', name='{self.name}')>"
