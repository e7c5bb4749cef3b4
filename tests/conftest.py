import os

# Banco em memória e logs isolados antes de importar a aplicação
os.environ["DATABASE_URI"] = "sqlite://"
os.environ.setdefault("LOGS_DIRECTORY", "./logs/test")

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Generator
import logging

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.models import User  # noqa: F401 (registra todos os modelos no metadata)
from app.main import app as fastapi_app
from app.core.password import get_password_hash
from app.core.permissions import ADMIN_ROLE_NAME, TECNICO_ROLE_NAME, CLIENTE_ROLE_NAME, USER_STATUS_INATIVO
from app.api.deps import get_db
from app.services.permission import permission_service

from tests.utils import (
    TEST_ADMIN_PASSWORD,
    TEST_CLIENTE_PASSWORD,
    TEST_INATIVO_PASSWORD,
    TEST_TECNICO_PASSWORD,
    get_auth_token,
    grant,
)

logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] [%(name)s] [%(funcName)s] %(message)s')
logger = logging.getLogger(__name__)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Sessão com esquema novo a cada teste e o catálogo de permissões já sincronizado.
    """
    Base.metadata.create_all(bind=engine)
    db_session = TestingSessionLocal()
    permission_service.sync_catalog(db_session)
    db_session.commit()
    try:
        yield db_session
    finally:
        db_session.close()
        Base.metadata.drop_all(bind=engine)

@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI, db: Session) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP assíncrono usando a mesma sessão do teste."""
    def override_get_db_for_test():
        yield db

    app.dependency_overrides[get_db] = override_get_db_for_test
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


def _ensure_user(db: Session, *, name: str, email: str, password: str, role: str, status: str = "ativo") -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        role=role,
        status=status,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def admin_user(db: Session) -> User:
    return _ensure_user(db, name="Admin Teste", email="admin@laboratorio.com.br", password=TEST_ADMIN_PASSWORD, role=ADMIN_ROLE_NAME)

@pytest.fixture(scope="function")
def tecnico_user(db: Session) -> User:
    """Técnico ativo com permissão apenas de visualizar certificados."""
    user = _ensure_user(db, name="Técnico Teste", email="tecnico@laboratorio.com.br", password=TEST_TECNICO_PASSWORD, role=TECNICO_ROLE_NAME)
    grant(db, user, ["certificates.view"])
    return user

@pytest.fixture(scope="function")
def cliente_user(db: Session) -> User:
    """Usuário sem nenhuma concessão."""
    return _ensure_user(db, name="Cliente Teste", email="cliente@laboratorio.com.br", password=TEST_CLIENTE_PASSWORD, role=CLIENTE_ROLE_NAME)

@pytest.fixture(scope="function")
def inactive_user(db: Session) -> User:
    user = _ensure_user(
        db, name="Inativo Teste", email="inativo@laboratorio.com.br", password=TEST_INATIVO_PASSWORD,
        role=TECNICO_ROLE_NAME, status=USER_STATUS_INATIVO,
    )
    grant(db, user, ["certificates.view"])
    return user

@pytest_asyncio.fixture(scope="function")
async def auth_token_admin(client: AsyncClient, admin_user: User) -> str:
    token = await get_auth_token(client, admin_user.email, TEST_ADMIN_PASSWORD)
    assert token, "Não foi possível obter o token do admin"
    return token

@pytest_asyncio.fixture(scope="function")
async def auth_token_tecnico(client: AsyncClient, tecnico_user: User) -> str:
    token = await get_auth_token(client, tecnico_user.email, TEST_TECNICO_PASSWORD)
    assert token, "Não foi possível obter o token do técnico"
    return token

@pytest_asyncio.fixture(scope="function")
async def auth_token_cliente(client: AsyncClient, cliente_user: User) -> str:
    token = await get_auth_token(client, cliente_user.email, TEST_CLIENTE_PASSWORD)
    assert token, "Não foi possível obter o token do cliente"
    return token
