import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request, status, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError, IntegrityError, NoResultFound

# Códigos SQLSTATE (PostgreSQL)
PGCODE_UNIQUE_VIOLATION = "23505"
PGCODE_FOREIGN_KEY_VIOLATION = "23503"
PGCODE_CHECK_VIOLATION = "23514"
PGCODE_NOT_NULL_VIOLATION = "23502"

# Fragmentos de nome de constraint/índice (PostgreSQL) ou "tabela.coluna" (SQLite)
UNIQUE_MESSAGES = {
    ("ix_users_email", "users.email"): "E-mail já cadastrado.",
    ("ix_clients_cnpj", "clients.cnpj"): "Já existe um cliente com esse CNPJ.",
    ("ix_suppliers_cnpj", "suppliers.cnpj"): "Já existe um fornecedor com esse CNPJ.",
    ("ix_certificates_certificate_number", "certificates.certificate_number"): "Já existe um certificado com esse número.",
    ("ix_permissions_code", "permissions.code"): "Já existe uma permissão com esse código.",
    ("pk_user_permissions", "user_permissions.user_id"): "A permissão já está concedida a este usuário.",
}

logger = logging.getLogger(__name__)


def _sqlstate(original_exc: Optional[BaseException]) -> Optional[str]:
    # psycopg 3 expõe `sqlstate`; psycopg2 expõe `pgcode`
    return getattr(original_exc, "sqlstate", None) or getattr(original_exc, "pgcode", None)


async def validation_exception_handler(request: Request, exc: Exception):
    """
    Erros de validação do pydantic na requisição (inclui CNPJ inválido).
    """
    if not isinstance(exc, RequestValidationError):
        return await generic_exception_handler(request, exc)

    error_details = []
    for error in exc.errors():
        field_loc = error.get("loc", ["body"])
        if field_loc and field_loc[0] == 'body' and len(field_loc) > 1:
            field = " -> ".join(map(str, field_loc[1:]))
        else:
            field = " -> ".join(map(str, field_loc))
        message = error.get("msg", "Erro de validação")
        error_details.append({"field": field, "message": message})
    logger.warning(f"Erro de validação na requisição: {request.method} {request.url} - Erros: {error_details}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Erro de validação nos dados de entrada.", "errors": error_details},
    )

async def http_exception_handler(request: Request, exc: Exception):
    """
    HTTPException lançadas explicitamente por rotas, serviços e dependências.
    """
    if not isinstance(exc, HTTPException):
        return await generic_exception_handler(request, exc)

    log_message = f"HTTPException - Status: {exc.status_code}, Detail: {exc.detail}, Request: {request.method} {request.url}"
    if exc.status_code >= 500:
        logger.error(log_message)
    elif exc.status_code >= 400:
        logger.warning(log_message)
    else:
        logger.info(log_message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )

async def database_exception_handler(request: Request, exc: Exception):
    """
    Traduz erros do SQLAlchemy/driver para respostas HTTP.
    """
    if not isinstance(exc, SQLAlchemyError):
        return await generic_exception_handler(request, exc)

    original_exc = getattr(exc, 'orig', None)
    sqlstate = _sqlstate(original_exc)
    diag = getattr(original_exc, 'diag', None)
    constraint_name = getattr(diag, 'constraint_name', None) if diag else None
    match_text = f"{constraint_name or ''} {original_exc if original_exc else exc}".lower()

    logger.error(
        f"Erro de banco - Tipo: {type(original_exc).__name__ if original_exc else type(exc).__name__}, "
        f"SQLSTATE: {sqlstate}, Constraint: '{constraint_name}', Request: {request.method} {request.url}",
        exc_info=True
    )

    if sqlstate == PGCODE_UNIQUE_VIOLATION or (isinstance(exc, IntegrityError) and "unique" in match_text):
        user_message = "Conflito: já existe um registro com dados que devem ser únicos."
        for fragments, message in UNIQUE_MESSAGES.items():
            if any(fragment in match_text for fragment in fragments):
                user_message = message
                break
        status_code = status.HTTP_409_CONFLICT
    elif sqlstate == PGCODE_FOREIGN_KEY_VIOLATION or (isinstance(exc, IntegrityError) and "foreign key" in match_text):
        user_message = "Erro de referência: o registro vinculado não existe ou ainda está em uso."
        status_code = status.HTTP_404_NOT_FOUND
    elif sqlstate == PGCODE_NOT_NULL_VIOLATION or (isinstance(exc, IntegrityError) and "not null" in match_text):
        column_name = getattr(diag, 'column_name', None) if diag else None
        user_message = f"Erro de dados: o campo '{column_name or 'desconhecido'}' não pode ser nulo."
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif sqlstate == PGCODE_CHECK_VIOLATION or (isinstance(exc, IntegrityError) and "check constraint" in match_text):
        user_message = f"Os dados violam uma regra de negócio (restrição: {constraint_name or 'desconhecida'})."
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, IntegrityError):
        user_message = "Erro de integridade no banco de dados. Verifique os dados."
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(exc, NoResultFound):
        user_message = "O recurso solicitado não foi encontrado."
        status_code = status.HTTP_404_NOT_FOUND
    else:
        logger.error(f"Erro de banco não mapeado: {type(exc).__name__} - {exc}")
        user_message = "Ocorreu um erro interno ao processar a solicitação no banco de dados."
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    logger.info(f"Erro de banco mapeado para Status={status_code}, Detail='{user_message}'")
    return JSONResponse(status_code=status_code, content={"detail": user_message})


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Qualquer exceção não tratada pelos demais handlers.
    """
    logger.critical(
        f"Exceção não tratada: {type(exc).__name__} - {exc}, Request: {request.method} {request.url}\n{traceback.format_exc()}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Ocorreu um erro interno inesperado na aplicação."},
    )

def register_error_handlers(app: FastAPI):
    """Registra os handlers de exceção na aplicação."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    logger.info("Handlers de erro personalizados registrados.")
