"""
Classificação de validade de certificados, padrões e documentos.

Uma única regra para todas as entidades com data de vencimento:

* sem data                           -> sem_validade
* data ilegível                      -> data_invalida
* vencimento <= referência           -> vencido (o próprio dia já conta como vencido)
* vencimento <= referência + janela  -> prestes_vencer
* caso contrário                     -> valido

O resultado depende do relógio, então deve ser recalculado a cada leitura.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.schemas.enums import ValidityStatus

logger = logging.getLogger(__name__)

DateInput = Union[date, datetime, str, None]


def today() -> date:
    """Data corrente no fuso do laboratório."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def _coerce_date(value: DateInput) -> Optional[date]:
    """Converte a entrada em `date`. Lança ValueError se não for interpretável."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # Aceita tanto 'AAAA-MM-DD' quanto timestamps ISO completos
        if len(text) > 10:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    raise ValueError(f"Tipo de data não suportado: {type(value).__name__}")


def classify(
    reference_date: date,
    expiration_date: DateInput,
    warning_window_days: Optional[int] = None,
) -> ValidityStatus:
    window = settings.VALIDITY_WARNING_WINDOW_DAYS if warning_window_days is None else warning_window_days

    try:
        expiration = _coerce_date(expiration_date)
    except ValueError:
        logger.warning(f"Data de vencimento ilegível: {expiration_date!r}")
        return ValidityStatus.DATA_INVALIDA

    if expiration is None:
        return ValidityStatus.SEM_VALIDADE
    if expiration <= reference_date:
        return ValidityStatus.VENCIDO
    if expiration <= reference_date + timedelta(days=window):
        return ValidityStatus.PRESTES_VENCER
    return ValidityStatus.VALIDO


def classify_now(expiration_date: DateInput, warning_window_days: Optional[int] = None) -> ValidityStatus:
    """Atalho para classificar em relação à data de hoje."""
    return classify(today(), expiration_date, warning_window_days)


def date_bounds_for_status(
    status: ValidityStatus,
    reference_date: date,
    warning_window_days: Optional[int] = None,
) -> Tuple[Optional[date], Optional[date]]:
    """
    Limites (após, até_inclusive) que um vencimento deve satisfazer para
    receber `status`. Usado para filtrar consultas pela data em vez da
    coluna `status` persistida, que pode estar defasada.

    SEM_VALIDADE e DATA_INVALIDA não têm intervalo e levantam ValueError.
    """
    window = settings.VALIDITY_WARNING_WINDOW_DAYS if warning_window_days is None else warning_window_days
    limit = reference_date + timedelta(days=window)

    if status == ValidityStatus.VENCIDO:
        return None, reference_date
    if status == ValidityStatus.PRESTES_VENCER:
        return reference_date, limit
    if status == ValidityStatus.VALIDO:
        return limit, None
    raise ValueError(f"Status '{status.value}' não corresponde a um intervalo de datas")
