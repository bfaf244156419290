"""Tests for reltag.core.errors module."""

from reltag.core.errors import ErrorCode


class TestErrorCodeValues:
    def test_values_are_stable(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.ENV_ERROR == 2
        assert ErrorCode.GIT_ERROR == 3
        assert ErrorCode.IO_ERROR == 5

    def test_str(self) -> None:
        assert str(ErrorCode.GIT_ERROR) == "git error"

    def test_success_flags(self) -> None:
        assert ErrorCode.OK.is_success is True
        assert ErrorCode.OK.is_error is False
        assert ErrorCode.ENV_ERROR.is_error is True

    def test_usable_as_exit_code(self) -> None:
        assert int(ErrorCode.IO_ERROR) == 5
