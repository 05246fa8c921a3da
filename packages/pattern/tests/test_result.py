"""Tests for typeknobs_pattern.result.ValidateResult."""

from dataclasses import FrozenInstanceError

import pytest

from typeknobs_pattern import (
    Empty,
    MatchFailed,
    MatchMode,
    Pattern,
    ResultAccessError,
    ResultFlag,
    ValidateResult,
)


@pytest.fixture
def ok():
    return ValidateResult.valid(21)


@pytest.fixture
def err():
    return ValidateResult.failure(MatchFailed("Parameter 'x' is incorrect", "x"))


@pytest.fixture
def fell_back():
    return ValidateResult.fallback(0)


class TestConstruction:
    """Test result constructors and invariants."""

    def test_valid(self, ok):
        assert ok.flag is ResultFlag.VALID
        assert ok.value == 21
        assert ok.error is None
        assert ok.success and not ok.failed and not ok.or_default

    def test_failure(self, err):
        assert err.flag is ResultFlag.ERROR
        assert isinstance(err.error, MatchFailed)
        assert err.failed and not err.success

    def test_fallback(self, fell_back):
        assert fell_back.flag is ResultFlag.DEFAULT
        assert fell_back.value == 0
        assert fell_back.error is None
        assert fell_back.or_default

    def test_fallback_empty_is_none(self):
        """Test that the Empty sentinel becomes a value of None."""
        assert ValidateResult.fallback(Empty).value is None

    def test_error_requires_error(self):
        """Test that value and error are mutually exclusive."""
        with pytest.raises(ValueError):
            ValidateResult(ResultFlag.ERROR)
        with pytest.raises(ValueError):
            ValidateResult(ResultFlag.VALID, _value=1, _error=RuntimeError("x"))

    def test_immutable(self, ok):
        with pytest.raises(FrozenInstanceError):
            ok.flag = ResultFlag.ERROR


class TestAccess:
    """Test value and error accessors."""

    def test_value_of_error_raises(self, err):
        """Test that reading a failed result's value is a loud error."""
        with pytest.raises(ResultAccessError):
            err.value

    def test_access_error_is_not_match_failed(self, err):
        with pytest.raises(ResultAccessError) as exc_info:
            err.value
        assert not isinstance(exc_info.value, MatchFailed)

    def test_missing_value_raises(self):
        with pytest.raises(ResultAccessError):
            ValidateResult(ResultFlag.VALID).value

    def test_bool(self, ok, err, fell_back):
        assert bool(ok) is True
        assert bool(fell_back) is True
        assert bool(err) is False

    def test_repr(self, ok, err):
        assert repr(ok) == "ValidateResult(value=21, flag='valid')"
        assert repr(err).startswith("ValidateResult(error=MatchFailed(")


class TestCombinators:
    """Test step and the named combinators."""

    @pytest.mark.parametrize("transform", [str, lambda x: x * 2, Pattern(int, "", MatchMode.KEEP)])
    def test_step_short_circuits_on_error(self, err, transform):
        """Test that failed results pass through any transform."""
        assert err.step(transform) is err

    def test_step_skips_defaults(self, fell_back):
        assert fell_back.step(lambda x: x + 1) is fell_back

    def test_step_function(self, ok):
        """Test that plain functions are applied to the value."""
        double = lambda x: x * 2  # noqa: E731
        assert ok.step(double) == double(21)

    def test_step_type(self, ok):
        assert ok.step(str) == "21"

    def test_step_pattern(self, ok):
        """Test that patterns re-validate the value."""
        small = Pattern(int, "", MatchMode.KEEP, validators=[lambda x: x < 10])

        result = ok.step(small)
        assert isinstance(result, ValidateResult)
        assert result.failed

    def test_step_rejects_other_shapes(self, ok):
        with pytest.raises(TypeError):
            ok.step(3)

    def test_rshift(self, ok):
        assert (ok >> (lambda x: x + 1)) == 22

    def test_map(self, ok, err):
        mapped = ok.map(lambda x: x + 1)

        assert mapped.success
        assert mapped.value == 22
        assert err.map(lambda x: x + 1) is err

    def test_and_then(self, ok, err):
        digits = Pattern(str, r"\d+", MatchMode.REGEX_MATCH)
        as_text = ok.map(str)

        assert as_text.and_then(digits).value == "21"
        assert err.and_then(digits) is err

    def test_build_with(self, ok, err):
        assert ok.build_with(float) == 21.0
        assert err.build_with(float) is err
