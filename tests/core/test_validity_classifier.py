from datetime import date, datetime, timedelta

import pytest

from app.core import validity
from app.core.config import settings
from app.schemas.enums import ValidityStatus

REF = date(2026, 3, 10)


@pytest.mark.parametrize("offset, expected", [
    (-365, ValidityStatus.VENCIDO),
    (-1, ValidityStatus.VENCIDO),
    (0, ValidityStatus.VENCIDO),
    (1, ValidityStatus.PRESTES_VENCER),
    (30, ValidityStatus.PRESTES_VENCER),
    (31, ValidityStatus.VALIDO),
    (400, ValidityStatus.VALIDO),
])
def test_classify_boundaries(offset, expected):
    assert validity.classify(REF, REF + timedelta(days=offset), 30) == expected


def test_default_window_comes_from_settings():
    window = settings.VALIDITY_WARNING_WINDOW_DAYS
    assert validity.classify(REF, REF + timedelta(days=window)) == ValidityStatus.PRESTES_VENCER
    assert validity.classify(REF, REF + timedelta(days=window + 1)) == ValidityStatus.VALIDO


def test_custom_window_override():
    assert validity.classify(REF, REF + timedelta(days=50), 60) == ValidityStatus.PRESTES_VENCER
    assert validity.classify(REF, REF + timedelta(days=5), 0) == ValidityStatus.VALIDO


def test_missing_and_unparseable_dates():
    assert validity.classify(REF, None) == ValidityStatus.SEM_VALIDADE
    assert validity.classify(REF, "   ") == ValidityStatus.SEM_VALIDADE
    assert validity.classify(REF, "31/02/2026") == ValidityStatus.DATA_INVALIDA
    assert validity.classify(REF, "2026-02-30") == ValidityStatus.DATA_INVALIDA
    assert validity.classify(REF, 20260310) == ValidityStatus.DATA_INVALIDA


def test_accepts_strings_and_datetimes():
    assert validity.classify(REF, "2026-03-11") == ValidityStatus.PRESTES_VENCER
    assert validity.classify(REF, "2026-03-10T23:59:59") == ValidityStatus.VENCIDO
    assert validity.classify(REF, datetime(2027, 1, 1, 8, 0)) == ValidityStatus.VALIDO


def test_classification_is_monotonic_in_reference_date():
    """Para um vencimento fixo, avançar o tempo nunca melhora o status."""
    rank = {ValidityStatus.VALIDO: 0, ValidityStatus.PRESTES_VENCER: 1, ValidityStatus.VENCIDO: 2}
    expiration = REF + timedelta(days=45)
    previous = None
    for day in range(0, 90):
        current = rank[validity.classify(REF + timedelta(days=day), expiration, 30)]
        if previous is not None:
            assert current >= previous
        previous = current


def test_classify_now_uses_today():
    today = validity.today()
    assert validity.classify_now(today) == ValidityStatus.VENCIDO
    assert validity.classify_now(today + timedelta(days=1)) == ValidityStatus.PRESTES_VENCER


@pytest.mark.parametrize("status", [ValidityStatus.VALIDO, ValidityStatus.PRESTES_VENCER, ValidityStatus.VENCIDO])
def test_date_bounds_agree_with_classify(status):
    after, up_to = validity.date_bounds_for_status(status, REF, 30)
    for offset in range(-40, 80):
        expiration = REF + timedelta(days=offset)
        in_bounds = (after is None or expiration > after) and (up_to is None or expiration <= up_to)
        assert in_bounds == (validity.classify(REF, expiration, 30) == status)


def test_date_bounds_reject_statuses_without_range():
    with pytest.raises(ValueError):
        validity.date_bounds_for_status(ValidityStatus.SEM_VALIDADE, REF)
