"""Tests for the constraint violation taxonomy."""

import pytest

from movie_catalog.catalog.violations import (
    ConstraintViolation,
    IntervalViolation,
    MandatoryValueViolation,
    NoViolation,
    PatternViolation,
    RangeViolation,
    ReferentialIntegrityViolation,
    StringLengthViolation,
    UniquenessViolation,
    ViolationKind,
)


class TestViolations:
    """Tests for check results."""

    def test_no_violation_is_ok(self) -> None:
        """Test the success marker is ok and raises nothing."""
        result = NoViolation()
        assert result.ok
        assert result.kind is ViolationKind.NONE
        assert result.raise_for_violation() is None

    @pytest.mark.parametrize(
        ("violation_class", "kind"),
        [
            (MandatoryValueViolation, ViolationKind.MANDATORY_VALUE),
            (RangeViolation, ViolationKind.RANGE),
            (PatternViolation, ViolationKind.PATTERN),
            (IntervalViolation, ViolationKind.INTERVAL),
            (StringLengthViolation, ViolationKind.STRING_LENGTH),
            (UniquenessViolation, ViolationKind.UNIQUENESS),
            (ReferentialIntegrityViolation, ViolationKind.REFERENTIAL_INTEGRITY),
        ],
    )
    def test_violation_kinds(self, violation_class: type[ConstraintViolation], kind: str) -> None:
        """Test each violation carries its kind and message."""
        violation = violation_class("broken")
        assert not violation.ok
        assert violation.kind is kind
        assert violation.message == "broken"
        assert str(violation) == "broken"

    def test_raise_for_violation(self) -> None:
        """Test a violation raises itself."""
        violation = RangeViolation("bad range")
        with pytest.raises(RangeViolation) as exc_info:
            violation.raise_for_violation()
        assert exc_info.value is violation

    def test_kinds_are_catchable_as_base(self) -> None:
        """Test every violation is a ConstraintViolation."""
        with pytest.raises(ConstraintViolation):
            UniquenessViolation("taken").raise_for_violation()
