import uuid
from datetime import date

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.permissions import PermissionCode
from app.models.user import User
from app.services.permission import permission_service

from tests.utils import auth_headers, create_client, grant

pytestmark = pytest.mark.asyncio

PERMS_URL = f"{settings.API_V1_STR}/permissoes"


def _permission_id(db: Session, code: str) -> str:
    return str(permission_service.get_by_code(db, code=code).id)


async def test_catalog_matches_code_enumeration(client: AsyncClient, auth_token_admin: str):
    response = await client.get(f"{PERMS_URL}/", headers=auth_headers(auth_token_admin))
    assert response.status_code == status.HTTP_200_OK
    codes = {p["code"] for p in response.json()}
    assert codes == {code.value for code in PermissionCode}
    users_view = next(p for p in response.json() if p["code"] == "users.view")
    assert users_view["module_name"] == "Usuários"


async def test_modules_listing(client: AsyncClient, auth_token_admin: str):
    response = await client.get(f"{PERMS_URL}/modulos", headers=auth_headers(auth_token_admin))
    assert response.status_code == status.HTTP_200_OK
    assert "certificates" in {m["id"] for m in response.json()}


async def test_catalog_requires_manage_permissions(client: AsyncClient, db: Session, cliente_user: User, auth_token_cliente: str):
    response = await client.get(f"{PERMS_URL}/", headers=auth_headers(auth_token_cliente))
    assert response.status_code == status.HTTP_403_FORBIDDEN

    grant(db, cliente_user, ["users.manage_permissions"])
    response = await client.get(f"{PERMS_URL}/", headers=auth_headers(auth_token_cliente))
    assert response.status_code == status.HTTP_200_OK


async def test_toggle_is_idempotent(client: AsyncClient, db: Session, cliente_user: User, auth_token_admin: str):
    url = f"{PERMS_URL}/usuario/{cliente_user.id}/{_permission_id(db, 'clients.view')}"
    for _ in range(2):
        response = await client.put(url, headers=auth_headers(auth_token_admin), json={"granted": True})
        assert response.status_code == status.HTTP_200_OK, response.text
        assert response.json()["granted"] is True
    assert permission_service.grants_for(db, cliente_user.id) == {"clients.view"}

    for _ in range(2):
        response = await client.put(url, headers=auth_headers(auth_token_admin), json={"granted": False})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["granted"] is False
    assert permission_service.grants_for(db, cliente_user.id) == set()


async def test_toggle_unknown_user_or_permission(client: AsyncClient, db: Session, cliente_user: User, auth_token_admin: str):
    response = await client.put(
        f"{PERMS_URL}/usuario/{uuid.uuid4()}/{_permission_id(db, 'clients.view')}",
        headers=auth_headers(auth_token_admin), json={"granted": True},
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND

    response = await client.put(
        f"{PERMS_URL}/usuario/{cliente_user.id}/{uuid.uuid4()}",
        headers=auth_headers(auth_token_admin), json={"granted": True},
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_user_permissions_view_marks_granted(client: AsyncClient, tecnico_user: User, auth_token_admin: str):
    response = await client.get(f"{PERMS_URL}/usuario/{tecnico_user.id}", headers=auth_headers(auth_token_admin))
    assert response.status_code == status.HTTP_200_OK
    granted = [p["code"] for p in response.json() if p["granted"]]
    assert granted == ["certificates.view"]


async def test_check_endpoint(client: AsyncClient, tecnico_user: User, admin_user: User, auth_token_admin: str):
    headers = auth_headers(auth_token_admin)

    response = await client.get(f"{PERMS_URL}/check/{tecnico_user.id}/certificates.view", headers=headers)
    assert response.json() == {"has_permission": True}

    response = await client.get(f"{PERMS_URL}/check/{tecnico_user.id}/certificates.delete", headers=headers)
    assert response.json() == {"has_permission": False}

    # Código fora do catálogo é negado a quem não é admin
    response = await client.get(f"{PERMS_URL}/check/{tecnico_user.id}/reports.export_everything", headers=headers)
    assert response.json() == {"has_permission": False}

    response = await client.get(f"{PERMS_URL}/check/{admin_user.id}/settings.edit", headers=headers)
    assert response.json() == {"has_permission": True}

    response = await client.get(f"{PERMS_URL}/check/{uuid.uuid4()}/settings.edit", headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_grant_takes_effect_on_next_request(
    client: AsyncClient, db: Session, tecnico_user: User, auth_token_admin: str, auth_token_tecnico: str
):
    """Técnico só com visualização: cria após a concessão e volta a ser barrado após a revogação."""
    lab_client = create_client(db)
    payload = {
        "certificate_number": "CAL-2025-0001",
        "client_id": str(lab_client.id),
        "equipment_name": "Micrômetro externo",
        "calibration_date": date(2025, 1, 10).isoformat(),
        "expiration_date": date(2026, 1, 10).isoformat(),
    }
    certs_url = f"{settings.API_V1_STR}/certificados/"
    toggle_url = f"{PERMS_URL}/usuario/{tecnico_user.id}/{_permission_id(db, 'certificates.create')}"

    response = await client.get(certs_url, headers=auth_headers(auth_token_tecnico))
    assert response.status_code == status.HTTP_200_OK

    response = await client.post(certs_url, headers=auth_headers(auth_token_tecnico), json=payload)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = await client.put(toggle_url, headers=auth_headers(auth_token_admin), json={"granted": True})
    assert response.status_code == status.HTTP_200_OK

    response = await client.post(certs_url, headers=auth_headers(auth_token_tecnico), json=payload)
    assert response.status_code == status.HTTP_201_CREATED, response.text

    response = await client.put(toggle_url, headers=auth_headers(auth_token_admin), json={"granted": False})
    assert response.status_code == status.HTTP_200_OK

    payload["certificate_number"] = "CAL-2025-0002"
    response = await client.post(certs_url, headers=auth_headers(auth_token_tecnico), json=payload)
    assert response.status_code == status.HTTP_403_FORBIDDEN
