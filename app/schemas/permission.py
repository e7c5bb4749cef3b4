import uuid
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PermissionModule(BaseModel):
    """Agrupamento de permissões exibido na tela de gestão."""
    id: str
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class Permission(BaseModel):
    id: uuid.UUID
    code: str
    name: str
    description: Optional[str] = None
    module_id: str
    module_name: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserPermission(Permission):
    """Permissão do catálogo com a indicação se o usuário a possui."""
    granted: bool = False


class PermissionToggle(BaseModel):
    granted: bool = Field(..., description="True concede, False revoga")


class PermissionToggleResult(BaseModel):
    user_id: uuid.UUID
    permission_id: uuid.UUID
    granted: bool


class PermissionCheck(BaseModel):
    has_permission: bool
