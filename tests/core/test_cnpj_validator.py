import pytest
from pydantic import BaseModel, ValidationError

from app.core import cnpj
from app.core.cnpj import CNPJ, CnpjError, CnpjInvalidLengthError

VALID_DIGITS = "11222333000181"
VALID_MASKED = "11.222.333/0001-81"


def test_normalize_strips_everything_but_digits():
    assert cnpj.normalize(" 11.222.333/0001-81 ") == VALID_DIGITS
    assert cnpj.normalize("") == ""
    assert cnpj.normalize("abc") == ""


@pytest.mark.parametrize("value", [VALID_DIGITS, VALID_MASKED, "11 222 333 0001 81"])
def test_validate_accepts_known_valid_cnpj(value):
    assert cnpj.validate(value) is True


def test_compute_check_digits_matches_known_value():
    assert cnpj.compute_check_digits("112223330001") == "81"


@pytest.mark.parametrize("value", [
    "11222333000182",  # segundo dígito errado
    "11222333000191",  # primeiro dígito errado
])
def test_validate_rejects_wrong_check_digits(value):
    assert cnpj.validate(value) is False


@pytest.mark.parametrize("digit", "0123456789")
def test_validate_rejects_repeated_sequences(digit):
    assert cnpj.validate(digit * 14) is False


@pytest.mark.parametrize("value", ["", "1122233300018", "112223330001811", "12.345"])
def test_validate_rejects_wrong_length(value):
    assert cnpj.validate(value) is False


def test_format_is_identical_for_masked_and_bare_input():
    assert cnpj.format_cnpj(cnpj.normalize(VALID_DIGITS)) == VALID_MASKED
    assert cnpj.format_cnpj(cnpj.normalize(VALID_MASKED)) == VALID_MASKED


def test_format_does_not_require_valid_check_digits():
    assert cnpj.format_cnpj("11222333000199") == "11.222.333/0001-99"


def test_format_raises_on_wrong_length():
    with pytest.raises(CnpjInvalidLengthError):
        cnpj.format_cnpj("123")
    # Também é um ValueError comum
    with pytest.raises(ValueError):
        cnpj.format_cnpj("1122233300018100")


def test_check_reports_reason():
    ok = cnpj.check(VALID_DIGITS)
    assert ok.valid is True and ok.formatted == VALID_MASKED and ok.error is None

    bad_digits = cnpj.check("11222333000182")
    assert bad_digits.valid is False
    assert bad_digits.formatted == "11.222.333/0001-82"
    assert bad_digits.error == CnpjError.INVALID_CHECKSUM

    repeated = cnpj.check("00000000000000")
    assert repeated.error == CnpjError.INVALID_CHECKSUM

    short = cnpj.check("12.345")
    assert short.valid is False
    assert short.formatted == "12345"
    assert short.error == CnpjError.INVALID_FORMAT


class _Registration(BaseModel):
    cnpj: CNPJ


def test_annotated_type_returns_canonical_form():
    assert _Registration(cnpj=VALID_DIGITS).cnpj == VALID_MASKED


@pytest.mark.parametrize("value", ["11222333000182", "123", "11111111111111"])
def test_annotated_type_rejects_invalid(value):
    with pytest.raises(ValidationError):
        _Registration(cnpj=value)
