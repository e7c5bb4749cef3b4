import uuid
from typing import TYPE_CHECKING, Optional
from datetime import datetime

from sqlalchemy import String, Text, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.db.base import Base

if TYPE_CHECKING:
    from .permission_module import PermissionModule


class Permission(Base):
    """
    Permissão do catálogo. Apenas `code` é verificado programaticamente;
    `name` e `description` são de apresentação.
    """
    __tablename__ = "permissions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(150))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    module_id: Mapped[str] = mapped_column(String(50), ForeignKey("permission_modules.id", ondelete="RESTRICT"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    module: Mapped["PermissionModule"] = relationship(
        "PermissionModule", back_populates="permissions", lazy="joined"
    )

    @property
    def module_name(self) -> Optional[str]:
        return self.module.name if self.module else None

    def __repr__(self) -> str:
        return f"<Permission(id={self.id}, code='{self.code}')>"
