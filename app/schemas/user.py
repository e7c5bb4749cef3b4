import uuid
from pydantic import BaseModel, EmailStr, Field, ConfigDict
from datetime import datetime
from typing import Optional, List

from .enums import UserRoleEnum, UserStatusEnum


class UserBase(BaseModel):
    """Campos comuns a todas as representações de usuário."""
    name: str = Field(..., min_length=2, max_length=255, description="Nome completo")
    email: EmailStr = Field(..., description="E-mail usado no login")

class UserCreate(UserBase):
    """Criação de usuário. O papel padrão é 'cliente'."""
    password: str = Field(..., min_length=8, description="Senha inicial")
    role: UserRoleEnum = UserRoleEnum.CLIENTE
    status: UserStatusEnum = UserStatusEnum.ATIVO

class UserStatusUpdate(BaseModel):
    status: UserStatusEnum

class User(UserBase):
    """Usuário devolvido pela API, sem a senha."""
    id: uuid.UUID
    role: UserRoleEnum
    status: UserStatusEnum
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserWithPermissions(User):
    """Usuário corrente acompanhado dos códigos de permissão concedidos."""
    permissions: List[str] = []
