import logging
import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.core.config import settings
from app.api.routes import api_router
from app.core.logging_config import setup_logging
from app.core.error_handlers import register_error_handlers
from app.db.session import SessionLocal
from app.services.permission import permission_service

setup_logging()
logger = logging.getLogger(__name__)


def sync_permission_catalog() -> None:
    """Garante que o catálogo do banco corresponda à enumeração de códigos."""
    db = SessionLocal()
    try:
        permission_service.sync_catalog(db)
        db.commit()
    except Exception:
        db.rollback()
        logger.critical("Falha ao sincronizar o catálogo de permissões na inicialização.", exc_info=True)
        raise
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("*"*50)
    logger.info(f"Iniciando aplicação: {settings.PROJECT_NAME}")
    logger.info("*"*50)

    sync_permission_catalog()

    PORT = os.getenv("PORT", "8000")
    BASE_URL = f"http://127.0.0.1:{PORT}"
    logger.info(f"API Docs (Swagger UI): {BASE_URL}{settings.API_V1_STR}/docs")
    logger.info(f"API Docs (ReDoc):      {BASE_URL}{settings.API_V1_STR}/redoc")
    logger.info("*"*50)

    yield

    logger.info("*"*50)
    logger.info(f"Encerrando aplicação: {settings.PROJECT_NAME}")
    logger.info("*"*50)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API de gestão de laboratório de calibração: permissões, certificados, padrões, documentos e cadastros.",
    version="1.0.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    lifespan=lifespan
)

if settings.BACKEND_CORS_ORIGINS:
    logger.info(f"Configurando CORS para as origens: {settings.BACKEND_CORS_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    logger.warning("CORS não configurado (BACKEND_CORS_ORIGINS ausente no .env)")

register_error_handlers(app)

app.include_router(api_router, prefix=settings.API_V1_STR)
logger.info(f"Routers da API incluídos sob o prefixo: {settings.API_V1_STR}")

@app.get("/", tags=["Root"], include_in_schema=False)
def read_root() -> dict:
    return {"status": "ok", "message": f"Bem-vindo à {settings.PROJECT_NAME}"}
