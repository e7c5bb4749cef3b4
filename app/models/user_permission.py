import uuid
from typing import TYPE_CHECKING
from datetime import datetime

from sqlalchemy import ForeignKey, DateTime, PrimaryKeyConstraint, Uuid, func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.db.base import Base

if TYPE_CHECKING:
    from .user import User
    from .permission import Permission


class UserPermission(Base):
    """
    Concessão de uma permissão a um usuário. A existência da linha significa
    'concedida'; a ausência significa 'negada'. Nunca é atualizada no lugar.
    """
    __tablename__ = "user_permissions"
    __table_args__ = (
        PrimaryKeyConstraint('user_id', 'permission_id', name='pk_user_permissions'),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True
    )
    permission_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("permissions.id", ondelete="RESTRICT"),
        primary_key=True
    )
    granted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    user: Mapped["User"] = relationship("User")
    permission: Mapped["Permission"] = relationship("Permission", lazy="joined")

    def __repr__(self) -> str:
        return f"<UserPermission(user_id={self.user_id}, permission_id={self.permission_id})>"
