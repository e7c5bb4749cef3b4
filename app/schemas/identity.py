import uuid
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field

from app.core.permissions import ADMIN_ROLE_NAME, USER_STATUS_ATIVO


class SessionIdentity(BaseModel):
    """
    Identidade explícita da requisição: quem é o usuário, seu papel, seu
    status e o conjunto de códigos concedidos no momento da leitura.
    """
    user_id: uuid.UUID
    role: str
    status: str
    grants: FrozenSet[str] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE_NAME

    @property
    def is_active(self) -> bool:
        return self.status == USER_STATUS_ATIVO
