"""Tests for currency code validation."""

import pytest

from annotationidentity.currencies import (
    currency_identifier,
    iso4217_codes,
    is_active_currency,
    validate_currency,
)
from annotationidentity.currencies.currencyidentity import check_currency_shape
from annotationidentity.errors import (
    AnnotationError,
    CurrencyError,
    ShapeError,
    UnknownCodeError,
)


class TestValidateCurrency:
    """Test shape and membership checks"""

    def test_valid_code(self, active_codes):
        assert validate_currency("USD", active_codes) == "USD"

    def test_lowercase_is_shape_error(self, active_codes):
        with pytest.raises(ShapeError) as exc:
            validate_currency("usd", active_codes)
        assert exc.value.offset == 0
        assert "uppercase" in exc.value.reason

    def test_mixed_case_points_at_first_lowercase(self, active_codes):
        with pytest.raises(ShapeError) as exc:
            validate_currency("USd", active_codes)
        assert exc.value.offset == 2

    def test_unknown_code(self, active_codes):
        with pytest.raises(UnknownCodeError) as exc:
            validate_currency("ZZZ", active_codes)
        assert exc.value.offset is None
        assert "ZZZ" in str(exc.value)

    @pytest.mark.parametrize("code,offset", [
        ("US", 2),
        ("USDX", 3),
        ("U$D", 1),
        ("", 0),
        ("ÄBC", 0),
        ("U D", 1),
        ("US1", 2),
    ])
    def test_shape_offsets(self, active_codes, code, offset):
        with pytest.raises(ShapeError) as exc:
            validate_currency(code, active_codes)
        assert exc.value.offset == offset

    def test_shape_checked_before_membership(self):
        """A malformed code is a ShapeError even if the set contains it"""
        with pytest.raises(ShapeError):
            validate_currency("usd", {"usd"})

    def test_caller_set_is_authoritative(self):
        """Only the supplied set decides membership"""
        assert validate_currency("XTS", {"XTS"}) == "XTS"
        with pytest.raises(UnknownCodeError):
            validate_currency("USD", set())

    def test_set_not_modified(self, active_codes):
        codes = set(active_codes)
        validate_currency("EUR", codes)
        assert codes == set(active_codes)

    def test_non_string_rejected(self, active_codes):
        with pytest.raises(TypeError):
            validate_currency(None, active_codes)

    def test_error_hierarchy(self, active_codes):
        for code in ("usd", "ZZZ"):
            with pytest.raises(CurrencyError):
                validate_currency(code, active_codes)
        assert issubclass(CurrencyError, AnnotationError)
        assert issubclass(CurrencyError, ValueError)

    def test_shape_only(self):
        assert check_currency_shape("ZZZ") == "ZZZ"


class TestISO4217:
    """Test the pycountry-backed helpers"""

    def test_codes_include_majors(self):
        codes = iso4217_codes()
        assert "USD" in codes
        assert "EUR" in codes
        assert "JPY" in codes
        assert all(len(c) == 3 for c in codes)

    def test_codes_cached(self):
        assert iso4217_codes() is iso4217_codes()

    def test_currency_identifier(self):
        result = currency_identifier("EUR")
        assert result["code"] == "EUR"
        assert result["name"] == "Euro"
        assert result["numeric"] == "978"

    @pytest.mark.parametrize("code", ["eur", "EURO", "ZZZ", ""])
    def test_currency_identifier_none(self, code):
        assert currency_identifier(code) is None

    def test_is_active_currency(self, active_codes):
        assert is_active_currency("GBP", active_codes)
        assert not is_active_currency("CHF", active_codes)
        assert not is_active_currency("gbp", active_codes)

    def test_is_active_currency_default_set(self):
        assert is_active_currency("CHF")
        assert not is_active_currency("ZZZ")
