import uuid
from typing import Optional
from datetime import date, datetime

from sqlalchemy import String, Date, DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Document(Base):
    """
    Documento do sistema da qualidade. O vencimento considerado é `next_review_date`.
    """
    __tablename__ = "documents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(100))
    version: Mapped[str] = mapped_column(String(20))
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    approved_by: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    approval_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    review_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    next_review_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(20), default="sem_validade", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, title='{self.title}', status='{self.status}')>"
