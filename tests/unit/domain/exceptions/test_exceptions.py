"""Tests for domain/exceptions.py."""

import pytest

from problemreport.domain.exceptions import (
    BacktraceMatchError,
    InvalidOptionError,
    NotificationOrderError,
    ProblemReportError,
    UnsupportedColorModeWarning,
)


class TestBacktraceMatchError:
    """Tests for BacktraceMatchError."""

    def test_is_problem_report_error(self) -> None:
        assert issubclass(BacktraceMatchError, ProblemReportError)

    def test_is_lookup_error(self) -> None:
        assert issubclass(BacktraceMatchError, LookupError)

    def test_attributes(self) -> None:
        err = BacktraceMatchError(file_path="tests/test_a.py", backtrace=["x:1:in 'f'"])
        assert err.file_path == "tests/test_a.py"
        assert err.backtrace == ("x:1:in 'f'",)

    def test_message_format(self) -> None:
        err = BacktraceMatchError(file_path="tests/test_a.py", backtrace=["a", "b"])
        assert str(err) == "No backtrace frame references 'tests/test_a.py' (2 frames scanned)"


class TestInvalidOptionError:
    """Tests for InvalidOptionError."""

    def test_is_value_error(self) -> None:
        assert issubclass(InvalidOptionError, ValueError)

    def test_message_lists_allowed_values(self) -> None:
        err = InvalidOptionError(option="opt", value="bogus", allowed=["a", "b"])
        assert str(err) == "Invalid value 'bogus' for opt, expected one of: a, b"
        assert err.allowed == ("a", "b")

    def test_can_catch_as_problem_report_error(self) -> None:
        with pytest.raises(ProblemReportError) as exc_info:
            raise InvalidOptionError(option="opt", value="x", allowed=())
        assert isinstance(exc_info.value, InvalidOptionError)


class TestNotificationOrderError:
    """Tests for NotificationOrderError."""

    def test_is_runtime_error(self) -> None:
        assert issubclass(NotificationOrderError, RuntimeError)

    def test_message_names_missing_notification(self) -> None:
        err = NotificationOrderError("stop")
        assert err.missing == "stop"
        assert str(err) == "summary received before stop"


class TestUnsupportedColorModeWarning:
    """Tests for UnsupportedColorModeWarning."""

    def test_is_user_warning(self) -> None:
        assert issubclass(UnsupportedColorModeWarning, UserWarning)

    def test_is_not_an_error(self) -> None:
        assert not issubclass(UnsupportedColorModeWarning, ProblemReportError)
