import uuid
from typing import TYPE_CHECKING, Optional
from datetime import date, datetime

from sqlalchemy import String, Text, Date, DateTime, ForeignKey, Numeric, Uuid, func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.db.base import Base

if TYPE_CHECKING:
    from .client import Client
    from .user import User


class Certificate(Base):
    """
    Certificado de calibração. `status` é derivado de `expiration_date` e
    recalculado em toda leitura e escrita.
    """
    __tablename__ = "certificates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    certificate_number: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    client_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("clients.id", ondelete="RESTRICT"), index=True)
    equipment_name: Mapped[str] = mapped_column(String(255))
    serial_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    calibration_date: Mapped[date] = mapped_column(Date)
    expiration_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(20), default="sem_validade", index=True)
    technician_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    temperature: Mapped[Optional[float]] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    humidity: Mapped[Optional[float]] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    observations: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    client: Mapped["Client"] = relationship("Client", back_populates="certificates", lazy="joined")
    technician: Mapped[Optional["User"]] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Certificate(id={self.id}, number='{self.certificate_number}', status='{self.status}')>"
