from datetime import date

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.certificate import Certificate
from app.models.user import User

from tests.utils import auth_headers, create_client, grant

pytestmark = pytest.mark.asyncio

CLIENTS_URL = f"{settings.API_V1_STR}/clientes"
SUPPLIERS_URL = f"{settings.API_V1_STR}/fornecedores"


def _client_payload(**overrides) -> dict:
    data = {
        "name": "Indústria de Balanças Ltda",
        "cnpj": "11444777000161",
        "email": "qualidade@balancas.com.br",
        "city": "Campinas",
        "state": "SP",
    }
    data.update(overrides)
    return data


async def test_create_client_stores_formatted_cnpj(client: AsyncClient, auth_token_admin: str):
    response = await client.post(f"{CLIENTS_URL}/", headers=auth_headers(auth_token_admin), json=_client_payload())
    assert response.status_code == status.HTTP_201_CREATED, response.text
    body = response.json()
    assert body["cnpj"] == "11.444.777/0001-61"
    assert body["status"] == "ativo"


async def test_create_client_invalid_cnpj(client: AsyncClient, auth_token_admin: str):
    response = await client.post(
        f"{CLIENTS_URL}/", headers=auth_headers(auth_token_admin), json=_client_payload(cnpj="11.444.777/0001-60")
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    errors = response.json()["errors"]
    assert [e["field"] for e in errors] == ["cnpj"]
    assert "dígitos verificadores" in errors[0]["message"]


async def test_create_client_duplicate_cnpj(client: AsyncClient, db: Session, auth_token_admin: str):
    create_client(db, cnpj="11.444.777/0001-61")
    response = await client.post(f"{CLIENTS_URL}/", headers=auth_headers(auth_token_admin), json=_client_payload())
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "Já existe um cliente com esse CNPJ."


async def test_client_routes_require_permissions(
    client: AsyncClient, db: Session, cliente_user: User, auth_token_cliente: str
):
    headers = auth_headers(auth_token_cliente)
    assert (await client.get(f"{CLIENTS_URL}/", headers=headers)).status_code == status.HTTP_403_FORBIDDEN

    grant(db, cliente_user, ["clients.view"])
    assert (await client.get(f"{CLIENTS_URL}/", headers=headers)).status_code == status.HTTP_200_OK
    response = await client.post(f"{CLIENTS_URL}/", headers=headers, json=_client_payload())
    assert response.status_code == status.HTTP_403_FORBIDDEN


async def test_search_clients(client: AsyncClient, db: Session, auth_token_admin: str):
    create_client(db, name="Alfa Metrologia", cnpj="11.222.333/0001-81")
    create_client(db, name="Beta Instrumentos", cnpj="11.444.777/0001-61")
    response = await client.get(f"{CLIENTS_URL}/", headers=auth_headers(auth_token_admin), params={"search": "beta"})
    assert response.status_code == status.HTTP_200_OK
    assert [c["name"] for c in response.json()] == ["Beta Instrumentos"]


async def test_update_client_cnpj_revalidated(client: AsyncClient, db: Session, auth_token_admin: str):
    lab_client = create_client(db)
    url = f"{CLIENTS_URL}/{lab_client.id}"

    response = await client.put(url, headers=auth_headers(auth_token_admin), json={"cnpj": "123"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = await client.put(url, headers=auth_headers(auth_token_admin), json={"cnpj": "11444777000161"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["cnpj"] == "11.444.777/0001-61"


async def test_delete_client_with_certificates_conflicts(client: AsyncClient, db: Session, auth_token_admin: str):
    lab_client = create_client(db)
    db.add(Certificate(certificate_number="CAL-1", client_id=lab_client.id, equipment_name="Torquímetro",
                       calibration_date=date(2024, 6, 1)))
    db.commit()

    response = await client.delete(f"{CLIENTS_URL}/{lab_client.id}", headers=auth_headers(auth_token_admin))
    assert response.status_code == status.HTTP_409_CONFLICT


async def test_delete_client_without_certificates(client: AsyncClient, db: Session, auth_token_admin: str):
    lab_client = create_client(db)
    response = await client.delete(f"{CLIENTS_URL}/{lab_client.id}", headers=auth_headers(auth_token_admin))
    assert response.status_code == status.HTTP_200_OK
    response = await client.get(f"{CLIENTS_URL}/{lab_client.id}", headers=auth_headers(auth_token_admin))
    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_supplier_without_cnpj(client: AsyncClient, auth_token_admin: str):
    response = await client.post(f"{SUPPLIERS_URL}/", headers=auth_headers(auth_token_admin),
                                 json={"name": "Fornecedor Informal"})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    assert response.json()["cnpj"] is None


async def test_supplier_with_invalid_cnpj(client: AsyncClient, auth_token_admin: str):
    response = await client.post(f"{SUPPLIERS_URL}/", headers=auth_headers(auth_token_admin),
                                 json={"name": "Fornecedor", "cnpj": "11.111.111/1111-11"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def test_supplier_duplicate_cnpj(client: AsyncClient, auth_token_admin: str):
    payload = {"name": "Fornecedor de Pesos", "cnpj": "11.222.333/0001-81"}
    first = await client.post(f"{SUPPLIERS_URL}/", headers=auth_headers(auth_token_admin), json=payload)
    assert first.status_code == status.HTTP_201_CREATED
    second = await client.post(f"{SUPPLIERS_URL}/", headers=auth_headers(auth_token_admin), json=payload)
    assert second.status_code == status.HTTP_409_CONFLICT
