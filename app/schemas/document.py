import uuid
from typing import Optional
from datetime import date, datetime

from pydantic import BaseModel, Field, ConfigDict

from .enums import ValidityStatus


class DocumentBase(BaseModel):
    """Documento da qualidade; o vencimento é a próxima revisão."""
    title: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., max_length=100, description="Ex.: procedimento, instrução, formulário")
    version: str = Field(..., max_length=20)
    category: Optional[str] = Field(None, max_length=100)
    approved_by: Optional[str] = Field(None, max_length=150)
    approval_date: Optional[date] = None
    review_date: Optional[date] = None
    next_review_date: Optional[date] = None

class DocumentCreate(DocumentBase):
    pass

class DocumentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, max_length=100)
    version: Optional[str] = Field(None, max_length=20)
    category: Optional[str] = Field(None, max_length=100)
    approved_by: Optional[str] = Field(None, max_length=150)
    approval_date: Optional[date] = None
    review_date: Optional[date] = None
    next_review_date: Optional[date] = None

class Document(DocumentBase):
    id: uuid.UUID
    status: ValidityStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
