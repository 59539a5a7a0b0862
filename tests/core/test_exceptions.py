"""
Tests for pylinreg exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyLinRegError)
    - Diagnostic attributes on DimensionError and FormatError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pylinreg.core.exceptions import (
    DimensionError,
    FormatError,
    ModelFormatError,
    PyLinRegError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyLinRegError."""

    def test_validation_error_is_pylinreg_error(self):
        with pytest.raises(PyLinRegError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_format_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise FormatError("bad line")

    def test_model_format_error_is_format_error(self):
        with pytest.raises(FormatError):
            raise ModelFormatError("bad model")

    def test_model_format_error_is_pylinreg_error(self):
        with pytest.raises(PyLinRegError):
            raise ModelFormatError("bad model")


# ═══════════════════════════════════════════════════════════════════════
# DimensionError
# ═══════════════════════════════════════════════════════════════════════


class TestDimensionError:

    def test_attributes(self):
        err = DimensionError("features: expected 3 features, got 2", expected=3, actual=2)
        assert str(err) == "features: expected 3 features, got 2"
        assert err.expected == 3
        assert err.actual == 2

    def test_defaults_are_none(self):
        err = DimensionError("X: expected 2D, got 3D")
        assert err.expected is None
        assert err.actual is None


# ═══════════════════════════════════════════════════════════════════════
# FormatError
# ═══════════════════════════════════════════════════════════════════════


class TestFormatError:

    def test_attributes(self):
        err = FormatError("line 7: bad goal", line_number=7, line="q\tx\tu\t1")
        assert err.line_number == 7
        assert err.line == "q\tx\tu\t1"

    def test_defaults_are_none(self):
        err = ModelFormatError("model: empty input")
        assert err.line_number is None
        assert err.line is None

    def test_catchable_with_attributes(self):
        with pytest.raises(FormatError) as exc_info:
            raise FormatError("bad", line_number=3)
        assert exc_info.value.line_number == 3
