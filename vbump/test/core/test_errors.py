"""Tests for vbump.core.errors module."""

from vbump.core.errors import ErrorCode


class TestErrorCodeValues:
    """Exit codes are part of the CLI contract."""

    def test_values(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.VCS_ERROR == 2
        assert ErrorCode.FORMAT_ERROR == 3
        assert ErrorCode.IO_ERROR == 5


class TestErrorCodeUsage:
    def test_can_use_as_int(self) -> None:
        code: int = ErrorCode.FORMAT_ERROR
        assert code == 3

    def test_str(self) -> None:
        assert str(ErrorCode.FORMAT_ERROR) == "format error"
