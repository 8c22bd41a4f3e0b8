"""
Tests for the domain exception hierarchy.
"""

import pytest

from snapd_api.core.common.exceptions import (
    AppNotFoundError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    SnapdAPIError,
    SnapNotFoundError,
    UnauthorizedError,
)
from snapd_api.core.domain.error_kinds import ErrorKind


class TestSnapdAPIError:
    """Tests for the base exception."""

    def test_defaults(self) -> None:
        exc = SnapdAPIError("oops")

        assert str(exc) == "oops"
        assert exc.status_code == 500
        assert exc.kind is None
        assert exc.details == {}

    def test_to_error_result(self) -> None:
        exc = SnapdAPIError("bad query", status_code=400, kind=ErrorKind.BAD_QUERY, value="q")

        result = exc.to_error_result()

        assert result.message == "bad query"
        assert result.kind is ErrorKind.BAD_QUERY
        assert result.value == "q"


@pytest.mark.parametrize(
    ("exc", "status", "kind"),
    [
        (BadRequestError(), 400, None),
        (UnauthorizedError(), 401, ErrorKind.LOGIN_REQUIRED),
        (ForbiddenError(), 403, None),
        (NotFoundError(), 404, None),
        (AppNotFoundError(), 404, ErrorKind.APP_NOT_FOUND),
        (ConflictError(), 409, None),
    ],
)
def test_status_and_kind(exc: SnapdAPIError, status: int, kind: ErrorKind | None) -> None:
    assert exc.status_code == status
    assert exc.kind == kind


def test_snap_not_found_carries_name() -> None:
    exc = SnapNotFoundError("hello")

    assert exc.status_code == 404
    assert exc.kind is ErrorKind.SNAP_NOT_FOUND
    assert exc.value == "hello"
    assert exc.snap_name == "hello"


def test_unauthorized_kind_can_be_overridden() -> None:
    exc = UnauthorizedError("bad otp", kind=ErrorKind.TWO_FACTOR_FAILED)

    assert exc.kind is ErrorKind.TWO_FACTOR_FAILED
