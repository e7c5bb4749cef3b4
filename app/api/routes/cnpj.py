from typing import Any

from fastapi import APIRouter, Depends

from app.api import deps
from app.core import cnpj as cnpj_validator
from app.core.cnpj import CnpjCheckResult

router = APIRouter()


@router.get(
    "/validar/{cnpj:path}",
    response_model=CnpjCheckResult,
    dependencies=[Depends(deps.get_current_active_user)],
    summary="Validar e formatar CNPJ",
)
def validate_cnpj(cnpj: str) -> Any:
    """
    Aceita o CNPJ com ou sem pontuação (a barra é permitida no caminho).
    Sempre responde 200; o resultado vem em `valid` e `error`.
    """
    return cnpj_validator.check(cnpj)
