import uuid
from datetime import timedelta

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy.orm import Session

from app.core import validity
from app.core.config import settings
from app.models.certificate import Certificate

from tests.utils import auth_headers, create_client

pytestmark = pytest.mark.asyncio

CERTS_URL = f"{settings.API_V1_STR}/certificados"


@pytest.fixture(scope="function")
def lab_client(db: Session):
    return create_client(db)


def _payload(client_id, number: str, expiration=None, **overrides) -> dict:
    today = validity.today()
    data = {
        "certificate_number": number,
        "client_id": str(client_id),
        "equipment_name": "Termohigrômetro",
        "serial_number": "TH-778",
        "calibration_date": (today - timedelta(days=300)).isoformat(),
        "expiration_date": expiration.isoformat() if expiration else None,
        "temperature": 20.5,
        "humidity": 55,
    }
    data.update(overrides)
    return data


async def test_create_certificate_computes_status(client: AsyncClient, lab_client, auth_token_admin: str):
    expiration = validity.today() + timedelta(days=15)
    response = await client.post(
        f"{CERTS_URL}/", headers=auth_headers(auth_token_admin),
        json=_payload(lab_client.id, "CAL-100", expiration, status="valido"),
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    body = response.json()
    assert body["status"] == "prestes_vencer"
    assert body["client"]["cnpj"] == lab_client.cnpj


async def test_create_certificate_without_expiration(client: AsyncClient, lab_client, auth_token_admin: str):
    response = await client.post(f"{CERTS_URL}/", headers=auth_headers(auth_token_admin),
                                 json=_payload(lab_client.id, "CAL-101"))
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "sem_validade"


async def test_expiration_before_calibration_rejected(client: AsyncClient, lab_client, auth_token_admin: str):
    today = validity.today()
    response = await client.post(
        f"{CERTS_URL}/", headers=auth_headers(auth_token_admin),
        json=_payload(lab_client.id, "CAL-102", today - timedelta(days=400)),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def test_unknown_client_rejected(client: AsyncClient, auth_token_admin: str):
    response = await client.post(f"{CERTS_URL}/", headers=auth_headers(auth_token_admin),
                                 json=_payload(uuid.uuid4(), "CAL-103"))
    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_duplicate_number_conflicts(client: AsyncClient, lab_client, auth_token_admin: str):
    headers = auth_headers(auth_token_admin)
    assert (await client.post(f"{CERTS_URL}/", headers=headers, json=_payload(lab_client.id, "CAL-104"))).status_code == 201
    response = await client.post(f"{CERTS_URL}/", headers=headers, json=_payload(lab_client.id, "CAL-104"))
    assert response.status_code == status.HTTP_409_CONFLICT


async def test_status_filter(client: AsyncClient, db: Session, lab_client, auth_token_tecnico: str):
    today = validity.today()
    calibration = today - timedelta(days=365)
    records = {
        "vencido": Certificate(certificate_number="F-1", client_id=lab_client.id, equipment_name="A",
                               calibration_date=calibration, expiration_date=today, status="valido"),
        "prestes_vencer": Certificate(certificate_number="F-2", client_id=lab_client.id, equipment_name="B",
                                      calibration_date=calibration, expiration_date=today + timedelta(days=1)),
        "valido": Certificate(certificate_number="F-3", client_id=lab_client.id, equipment_name="C",
                              calibration_date=calibration, expiration_date=today + timedelta(days=365)),
        "sem_validade": Certificate(certificate_number="F-4", client_id=lab_client.id, equipment_name="D",
                                    calibration_date=calibration),
    }
    db.add_all(records.values())
    db.commit()

    headers = auth_headers(auth_token_tecnico)
    for expected, record in records.items():
        response = await client.get(f"{CERTS_URL}/", headers=headers, params={"status": expected})
        assert response.status_code == status.HTTP_200_OK, response.text
        body = response.json()
        assert [c["certificate_number"] for c in body] == [record.certificate_number]
        assert body[0]["status"] == expected

    response = await client.get(f"{CERTS_URL}/", headers=headers, params={"status": "qualquer"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def test_update_recomputes_status(client: AsyncClient, lab_client, auth_token_admin: str):
    headers = auth_headers(auth_token_admin)
    created = (await client.post(f"{CERTS_URL}/", headers=headers, json=_payload(lab_client.id, "CAL-105"))).json()

    response = await client.put(
        f"{CERTS_URL}/{created['id']}", headers=headers,
        json={"expiration_date": (validity.today() + timedelta(days=200)).isoformat()},
    )
    assert response.status_code == status.HTTP_200_OK, response.text
    assert response.json()["status"] == "valido"


async def test_tecnico_cannot_delete(client: AsyncClient, db: Session, lab_client, auth_token_tecnico: str):
    cert = Certificate(certificate_number="D-1", client_id=lab_client.id, equipment_name="Balança",
                       calibration_date=validity.today())
    db.add(cert)
    db.commit()
    response = await client.delete(f"{CERTS_URL}/{cert.id}", headers=auth_headers(auth_token_tecnico))
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = await client.get(f"{CERTS_URL}/{cert.id}", headers=auth_headers(auth_token_tecnico))
    assert response.status_code == status.HTTP_200_OK
