"""Tests for registry-free field checks."""

from datetime import date

import pytest

from movie_catalog.catalog.checks import (
    FIRST_SCREENING,
    as_identifier,
    check_episode_no,
    check_movie_genre,
    check_name,
    check_role,
    check_tv_series_fields,
    is_integer_or_integer_string,
    parse_genre,
    validate_date,
    validate_title,
)
from movie_catalog.catalog.enums import MovieGenre
from movie_catalog.catalog.violations import (
    ConstraintViolation,
    IntervalViolation,
    MandatoryValueViolation,
    NoViolation,
    PatternViolation,
    RangeViolation,
    StringLengthViolation,
    ViolationKind,
)


class TestIntegerParsing:
    """Tests for integer-or-integer-string detection."""

    @pytest.mark.parametrize("value", [5, "5", "-3", " 12 ", MovieGenre.BIOGRAPHY])
    def test_accepts_integers(self, value: object) -> None:
        """Test ints and integer strings are accepted."""
        assert is_integer_or_integer_string(value)

    @pytest.mark.parametrize("value", [True, 5.0, "5.0", "abc", "", None])
    def test_rejects_non_integers(self, value: object) -> None:
        """Test booleans, floats and other strings are rejected."""
        assert not is_integer_or_integer_string(value)

    def test_as_identifier(self) -> None:
        """Test id-like values are converted to registry keys."""
        assert as_identifier("7") == 7
        assert as_identifier(7) == 7
        assert as_identifier("seven") is None


class TestValidateTitle:
    """Tests for title validation."""

    def test_valid_title(self) -> None:
        """Test a normal title passes."""
        assert validate_title("Pulp Fiction") == NoViolation()

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_missing_title(self, title: object) -> None:
        """Test a missing or empty title is a mandatory value violation."""
        assert isinstance(validate_title(title), MandatoryValueViolation)

    def test_non_string_title(self) -> None:
        """Test a non-string title is a range violation."""
        assert isinstance(validate_title(42), RangeViolation)

    def test_title_length_limit(self) -> None:
        """Test titles may have at most 120 characters."""
        assert validate_title("x" * 120).ok
        assert isinstance(validate_title("x" * 121), StringLengthViolation)


class TestValidateDate:
    """Tests for release date validation."""

    def test_accepts_iso_date(self) -> None:
        """Test an ordinary ISO date is accepted."""
        assert validate_date("1994-05-12").ok

    def test_rejects_date_before_first_screening(self) -> None:
        """Test dates before 1895-12-28 are out of the interval."""
        assert isinstance(validate_date("1895-01-01"), IntervalViolation)

    def test_rejects_far_future_date(self) -> None:
        """Test implausibly future dates are out of the interval."""
        assert isinstance(validate_date("2999-01-01"), IntervalViolation)

    def test_rejects_wrong_format(self) -> None:
        """Test dotted day-first dates do not match the pattern."""
        assert isinstance(validate_date("12.05.1994"), PatternViolation)

    def test_first_screening_boundary(self) -> None:
        """Test the first screening day itself is accepted, the day before is not."""
        assert validate_date(FIRST_SCREENING.isoformat()).ok
        assert isinstance(validate_date("1895-12-27"), IntervalViolation)

    def test_accepts_utc_timestamp(self) -> None:
        """Test the timestamp form with milliseconds is accepted."""
        assert validate_date("2001-09-11T00:00:00.000Z").ok

    def test_rejects_invalid_time(self) -> None:
        """Test the time part of a timestamp is checked too."""
        assert isinstance(validate_date("2001-09-11T99:99:99.000Z"), PatternViolation)

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_date(self, value: object) -> None:
        """Test a missing date is a mandatory value violation."""
        assert isinstance(validate_date(value), MandatoryValueViolation)

    def test_non_string_date(self) -> None:
        """Test a non-string date is a range violation."""
        assert isinstance(validate_date(19940512), RangeViolation)

    def test_impossible_calendar_date(self) -> None:
        """Test a well-formed but impossible date is a pattern violation."""
        assert isinstance(validate_date("1994-02-30"), PatternViolation)

    def test_upper_bound_is_current_year(self) -> None:
        """Test dates after the end of the reference year are out of the interval."""
        today = date(2026, 3, 1)
        assert validate_date("2026-12-31", today=today).ok
        assert isinstance(validate_date("2027-01-01", today=today), IntervalViolation)

    def test_next_year_is_rejected(self) -> None:
        """Test a date in the coming year is rejected by default."""
        next_year = date.today().year + 1
        assert isinstance(validate_date(f"{next_year}-06-01"), IntervalViolation)


class TestEnumerationChecks:
    """Tests for genre and role codes."""

    @pytest.mark.parametrize("genre", [None, "", 1, "2", MovieGenre.TV_SERIES_EPISODE])
    def test_valid_genres(self, genre: object) -> None:
        """Test blank values and known codes pass."""
        assert check_movie_genre(genre).ok

    @pytest.mark.parametrize("genre", [0, 3, "abc", "1.5"])
    def test_invalid_genres(self, genre: object) -> None:
        """Test unknown codes are range violations."""
        assert isinstance(check_movie_genre(genre), RangeViolation)

    def test_parse_genre(self) -> None:
        """Test codes are converted to enum members."""
        assert parse_genre("1") is MovieGenre.BIOGRAPHY
        assert parse_genre("") is None

    def test_role_codes(self) -> None:
        """Test role codes 1-3 pass and others fail."""
        assert check_role(3).ok
        assert check_role(None).ok
        assert isinstance(check_role(4), RangeViolation)


class TestCheckName:
    """Tests for person names."""

    def test_name_is_mandatory(self) -> None:
        """Test a missing name is a mandatory value violation."""
        assert isinstance(check_name(""), MandatoryValueViolation)

    def test_name_must_be_string(self) -> None:
        """Test a non-string name is a range violation."""
        assert isinstance(check_name(12), RangeViolation)


class TestTvSeriesFields:
    """Tests for the TV series episode fields."""

    def test_valid_episode(self) -> None:
        """Test title and number pass for a TV series episode."""
        assert check_tv_series_fields("Ep1", 3, MovieGenre.TV_SERIES_EPISODE).ok

    def test_fields_absent_without_genre(self) -> None:
        """Test no fields are required without a genre."""
        assert check_tv_series_fields(None, None, None).ok

    def test_missing_title(self) -> None:
        """Test the episode title is mandatory for episodes."""
        result = check_tv_series_fields(None, 3, MovieGenre.TV_SERIES_EPISODE)
        assert isinstance(result, MandatoryValueViolation)

    def test_missing_number(self) -> None:
        """Test the episode number is mandatory for episodes."""
        result = check_tv_series_fields("Ep1", None, MovieGenre.TV_SERIES_EPISODE)
        assert isinstance(result, MandatoryValueViolation)

    def test_fields_forbidden_for_other_genres(self) -> None:
        """Test episode fields on a biography are a generic constraint violation."""
        result = check_tv_series_fields("Ep1", None, MovieGenre.BIOGRAPHY)
        assert type(result) is ConstraintViolation
        assert result.kind is ViolationKind.CONSTRAINT

    @pytest.mark.parametrize("episode_no", ["-1", 0, "x"])
    def test_invalid_number(self, episode_no: object) -> None:
        """Test the episode number must be a positive integer."""
        assert isinstance(check_episode_no(episode_no, 2), RangeViolation)
