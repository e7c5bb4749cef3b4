"""
Validação e formatação de CNPJ (Cadastro Nacional da Pessoa Jurídica).

O CNPJ tem 14 dígitos; os dois últimos são dígitos verificadores calculados
pelo algoritmo de módulo 11 com pesos 2..9 aplicados da direita para a
esquerda. Todas as funções são puras e não dependem de armazenamento.
"""
import re
from enum import Enum
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel

CNPJ_LENGTH = 14

_NON_DIGITS = re.compile(r"\D")


class CnpjError(str, Enum):
    INVALID_FORMAT = "invalid_format"
    INVALID_CHECKSUM = "invalid_checksum"


class CnpjInvalidLengthError(ValueError):
    """A entrada não contém exatamente 14 dígitos."""

    def __init__(self, digits: str):
        self.digits = digits
        super().__init__(f"CNPJ deve ter {CNPJ_LENGTH} dígitos (recebidos {len(digits)})")


class CnpjCheckResult(BaseModel):
    valid: bool
    formatted: str
    error: Optional[CnpjError] = None


def normalize(value: str) -> str:
    """Remove todos os caracteres que não são dígitos."""
    return _NON_DIGITS.sub("", value or "")


def _check_digit(digits: str) -> int:
    total = 0
    weight = 2
    for char in reversed(digits):
        total += int(char) * weight
        weight = 2 if weight == 9 else weight + 1
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def compute_check_digits(base: str) -> str:
    """Calcula os dois dígitos verificadores a partir dos 12 primeiros dígitos."""
    first = _check_digit(base[:12])
    second = _check_digit(base[:12] + str(first))
    return f"{first}{second}"


def validate(value: str) -> bool:
    """Verifica comprimento, sequência repetida e dígitos verificadores."""
    digits = normalize(value)
    if len(digits) != CNPJ_LENGTH:
        return False
    if len(set(digits)) == 1:
        return False
    return compute_check_digits(digits) == digits[12:]


def format_cnpj(value: str) -> str:
    """
    Formata como NN.NNN.NNN/NNNN-NN.

    Exige apenas 14 dígitos; não valida os dígitos verificadores.
    """
    d = normalize(value)
    if len(d) != CNPJ_LENGTH:
        raise CnpjInvalidLengthError(d)
    return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:]}"


def check(value: str) -> CnpjCheckResult:
    """
    Resultado completo para quem chama: validade, forma canônica e motivo.

    `formatted` é a máscara sempre que houver 14 dígitos; caso contrário
    traz apenas os dígitos encontrados.
    """
    digits = normalize(value)
    if len(digits) != CNPJ_LENGTH:
        return CnpjCheckResult(valid=False, formatted=digits, error=CnpjError.INVALID_FORMAT)

    formatted = format_cnpj(digits)
    if not validate(digits):
        return CnpjCheckResult(valid=False, formatted=formatted, error=CnpjError.INVALID_CHECKSUM)
    return CnpjCheckResult(valid=True, formatted=formatted)


def _canonical_cnpj(value: str) -> str:
    result = check(value)
    if result.error == CnpjError.INVALID_FORMAT:
        raise ValueError(f"CNPJ deve ter {CNPJ_LENGTH} dígitos")
    if result.error == CnpjError.INVALID_CHECKSUM:
        raise ValueError("CNPJ inválido: dígitos verificadores não conferem")
    return result.formatted


# Tipo para schemas: aceita qualquer pontuação e devolve a forma canônica
CNPJ = Annotated[str, AfterValidator(_canonical_cnpj)]
