import json
import logging
from typing import Iterable

import httpx
from httpx import AsyncClient
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.client import Client
from app.models.user import User
from app.services.permission import permission_service

logger = logging.getLogger(__name__)

# Senhas dos usuários criados pelas fixtures
TEST_ADMIN_PASSWORD = "AdminPass123!"
TEST_TECNICO_PASSWORD = "TecnicoPass123!"
TEST_CLIENTE_PASSWORD = "ClientePass123!"
TEST_INATIVO_PASSWORD = "InativoPass123!"


async def get_auth_token(client: AsyncClient, email: str, password: str) -> str | None:
    """Faz login e devolve o access token, ou None se falhar."""
    url = f"{settings.API_V1_STR}/auth/login/access-token"
    response = await client.post(url, data={"username": email, "password": password})
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        try:
            error_detail = e.response.json()
        except json.JSONDecodeError:
            error_detail = e.response.text
        logger.error(f"Falha ao obter token para '{email}': {e.response.status_code} {error_detail}")
        return None
    return response.json().get("access_token")


def grant(db: Session, user: User, codes: Iterable[str]) -> None:
    """Concede códigos do catálogo a um usuário e faz commit."""
    for code in codes:
        permission = permission_service.get_by_code(db, code=code)
        assert permission is not None, f"Código '{code}' ausente do catálogo"
        permission_service.toggle(db, user_id=user.id, permission_id=permission.id, granted=True)
    db.commit()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_client(db: Session, *, name: str = "Cliente Padrão Ltda", cnpj: str = "11.222.333/0001-81") -> Client:
    """Cria um cliente direto no banco (CNPJ já formatado)."""
    client = Client(name=name, cnpj=cnpj, email="contato@clientepadrao.com.br")
    db.add(client)
    db.commit()
    db.refresh(client)
    return client
