import uuid
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, ConfigDict

from app.core.cnpj import CNPJ
from .enums import RegistrationStatusEnum

# --- Schema Base ---
class SupplierBase(BaseModel):
    """Campos de um fornecedor. O CNPJ é opcional, mas se vier precisa ser válido."""
    name: str = Field(..., min_length=2, max_length=255)
    cnpj: Optional[CNPJ] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, min_length=2, max_length=2)
    zip_code: Optional[str] = Field(None, max_length=10)

class SupplierCreate(SupplierBase):
    status: RegistrationStatusEnum = RegistrationStatusEnum.ATIVO

class SupplierUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    cnpj: Optional[CNPJ] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, min_length=2, max_length=2)
    zip_code: Optional[str] = Field(None, max_length=10)
    status: Optional[RegistrationStatusEnum] = None

class Supplier(BaseModel):
    id: uuid.UUID
    name: str
    cnpj: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    status: RegistrationStatusEnum
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
