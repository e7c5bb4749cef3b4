import uuid
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, ConfigDict

from app.core.cnpj import CNPJ
from .enums import RegistrationStatusEnum

# --- Schema Base ---
class ClientBase(BaseModel):
    """Campos que definem um cliente do laboratório."""
    name: str = Field(..., min_length=2, max_length=255, description="Razão social ou nome fantasia")
    cnpj: CNPJ = Field(..., description="CNPJ com ou sem pontuação; gravado no formato NN.NNN.NNN/NNNN-NN")
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, min_length=2, max_length=2, description="UF")
    zip_code: Optional[str] = Field(None, max_length=10)

# --- Criação ---
class ClientCreate(ClientBase):
    status: RegistrationStatusEnum = RegistrationStatusEnum.ATIVO

# --- Atualização ---
class ClientUpdate(BaseModel):
    """Todos os campos opcionais para atualização parcial."""
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    cnpj: Optional[CNPJ] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, min_length=2, max_length=2)
    zip_code: Optional[str] = Field(None, max_length=10)
    status: Optional[RegistrationStatusEnum] = None

# --- Resposta ---
class Client(BaseModel):
    id: uuid.UUID
    name: str
    cnpj: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    status: RegistrationStatusEnum
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class ClientSimple(BaseModel):
    id: uuid.UUID
    name: str
    cnpj: str

    model_config = ConfigDict(from_attributes=True)
