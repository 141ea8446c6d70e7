"""Tests for type-name annotation dispatch and error re-anchoring."""

import pickle

import pytest

from annotationidentity import parse_annotation, validate_annotation
from annotationidentity.errors import (
    AnnotationError,
    LexError,
    ShapeError,
    UnitSyntaxError,
    UnknownCodeError,
)


class TestParseAnnotation:
    """Test dispatch on the type-name namespace"""

    def test_unit(self):
        result = parse_annotation("unit:s⋅m")
        assert result["kind"] == "unit"
        assert result["namespace"] == "unit:"
        assert result["payload"] == "s⋅m"
        assert result["canonical"] == "m⋅s"
        assert result["unit"].text == "m⋅s"

    def test_angle(self):
        result = parse_annotation("math:angle:τ")
        assert result["kind"] == "unit"
        assert result["namespace"] == "math:angle:"
        assert result["canonical"] == "τ"

    def test_dimensionless_unit(self):
        result = parse_annotation("unit:m/m")
        assert result["canonical"] == ""
        assert result["unit"].is_dimensionless

    def test_currency(self, active_codes):
        result = parse_annotation("currency:EUR", active_codes=active_codes)
        assert result["kind"] == "currency"
        assert result["canonical"] == "EUR"
        assert result["unit"] is None

    @pytest.mark.parametrize("type_name", ["unit:m", "currency:USD", "schema:Person"])
    def test_result_keys_uniform(self, type_name, active_codes):
        """Every kind returns the same keys"""
        result = parse_annotation(type_name, active_codes=active_codes)
        assert set(result) == {"kind", "namespace", "payload", "canonical", "unit"}

    @pytest.mark.parametrize("type_name", [None, 42, b"unit:m"])
    def test_non_string_rejected(self, type_name):
        with pytest.raises(TypeError):
            parse_annotation(type_name)

    def test_currency_default_codes(self):
        assert parse_annotation("currency:CHF")["canonical"] == "CHF"

    def test_currency_custom_set(self):
        assert parse_annotation("currency:ZZZ", active_codes={"ZZZ"})["canonical"] == "ZZZ"

    @pytest.mark.parametrize("type_name", [
        "schema:Person.email",
        "int32",
        "",
        "Unit:m",
    ])
    def test_opaque(self, type_name):
        result = parse_annotation(type_name)
        assert result["kind"] == "opaque"
        assert result["payload"] == type_name
        assert result["canonical"] is None

    def test_strict_division(self):
        with pytest.raises(UnitSyntaxError) as exc:
            parse_annotation("unit:m/s/K", allow_chained_division=False)
        assert exc.value.offset == 8


class TestErrorOffsets:
    """Errors point into the full type-name"""

    def test_unit_syntax_offset(self):
        with pytest.raises(UnitSyntaxError) as exc:
            parse_annotation("unit:m//s")
        assert exc.value.offset == 7
        assert exc.value.text == "unit:m//s"
        assert exc.value.production == "factor"
        assert str(exc.value).endswith("unit:m//s\n       ^")

    def test_unit_lex_offset(self):
        with pytest.raises(LexError) as exc:
            parse_annotation("math:angle:kτ")
        assert exc.value.offset == 11

    def test_currency_shape_offset(self):
        with pytest.raises(ShapeError) as exc:
            parse_annotation("currency:usd")
        assert exc.value.offset == 9
        assert exc.value.text == "currency:usd"

    def test_unknown_code_has_no_offset(self, active_codes):
        with pytest.raises(UnknownCodeError) as exc:
            parse_annotation("currency:CHF", active_codes=active_codes)
        assert exc.value.offset is None

    def test_empty_payload(self):
        with pytest.raises(UnitSyntaxError) as exc:
            parse_annotation("unit:")
        assert exc.value.offset == 5

    def test_shifted_keeps_class_and_cause(self):
        with pytest.raises(LexError) as exc:
            parse_annotation("unit:m²⁻¹")
        assert isinstance(exc.value.__cause__, LexError)
        assert exc.value.__cause__.offset == 2
        assert exc.value.__cause__.text == "m²⁻¹"
        assert exc.value.offset == 7


class TestLegacyPrefix:
    """The old 'units:' spelling still works, with a warning"""

    def test_deprecation_warning(self):
        with pytest.warns(DeprecationWarning, match="units:"):
            result = parse_annotation("units:m/s")
        assert result["namespace"] == "unit:"
        assert result["canonical"] == "m⋅s⁻¹"

    def test_legacy_offsets(self):
        with pytest.warns(DeprecationWarning):
            with pytest.raises(UnitSyntaxError) as exc:
                parse_annotation("units:m//s")
        assert exc.value.offset == 8


class TestValidateAnnotation:
    """Test the non-raising form"""

    def test_valid(self):
        result = validate_annotation("unit:kW/m²")
        assert result["valid"] is True
        assert result["kind"] == "unit"
        assert result["error"] is None

    def test_invalid_currency(self):
        result = validate_annotation("currency:usd")
        assert result == {
            "valid": False,
            "kind": None,
            "error": "ShapeError",
            "offset": 9,
            "message": "currency code must be uppercase A-Z",
        }

    def test_invalid_unit(self):
        result = validate_annotation("unit:m⋅")
        assert result["valid"] is False
        assert result["error"] == "UnitSyntaxError"
        assert result["offset"] == 7

    def test_strict_division(self):
        assert validate_annotation("unit:m/s/K")["valid"] is True
        result = validate_annotation("unit:m/s/K", allow_chained_division=False)
        assert result["valid"] is False
        assert result["error"] == "UnitSyntaxError"
        assert result["offset"] == 8

    def test_opaque_is_valid(self):
        result = validate_annotation("anything at all")
        assert result["valid"] is True
        assert result["kind"] == "opaque"


class TestErrorRendering:
    """Test AnnotationError formatting"""

    def test_caret_under_offset(self):
        err = UnitSyntaxError("bad", "m//s", 2)
        assert str(err) == "bad at offset 2\nm//s\n  ^"

    def test_no_offset(self):
        err = UnknownCodeError("'ZZZ' is not an active currency code", "ZZZ")
        assert str(err) == "'ZZZ' is not an active currency code"

    def test_offset_at_end(self):
        err = UnitSyntaxError("empty", "m/", 2)
        assert str(err).endswith("m/\n  ^")

    def test_shifted(self):
        err = LexError("bad literal", "xyz", 0, "literal")
        moved = err.shifted(5, "unit:xyz")
        assert type(moved) is LexError
        assert moved.offset == 5
        assert moved.production == "literal"
        assert moved.reason == "bad literal"
        assert err.offset == 0
        assert isinstance(moved, AnnotationError)

    def test_args_are_constructor_arguments(self):
        err = LexError("bad literal", "xyz", 0, "literal")
        assert err.args == ("bad literal", "xyz", 0, "literal")
        assert ShapeError("bad", "usd", 0).args == ("bad", "usd", 0)

    @pytest.mark.parametrize("err", [
        LexError("bad literal", "xyz", 0, "literal"),
        UnitSyntaxError("unterminated group", "m/(s", 2, "group"),
        ShapeError("currency code must be uppercase A-Z", "usd", 0),
        UnknownCodeError("'ZZZ' is not an active currency code", "ZZZ"),
    ])
    def test_pickle(self, err):
        """Errors survive a round trip through pickle, e.g. across processes"""
        restored = pickle.loads(pickle.dumps(err))
        assert type(restored) is type(err)
        assert restored.reason == err.reason
        assert restored.text == err.text
        assert restored.offset == err.offset
        assert getattr(restored, "production", None) == getattr(err, "production", None)
        assert str(restored) == str(err)

    def test_pickle_shifted(self):
        with pytest.raises(UnitSyntaxError) as exc:
            parse_annotation("unit:m//s")
        restored = pickle.loads(pickle.dumps(exc.value))
        assert restored.offset == 7
        assert restored.text == "unit:m//s"
        assert restored.production == "factor"
