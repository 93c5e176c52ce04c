import pytest
from fastapi import HTTPException

from core.errors import ErrorKind, conflict, forbidden, invalid, not_found
from core.result import Result


def test_ok_unwraps_value():
    result = Result.ok(42)
    assert result.is_ok
    assert result.unwrap() == 42


def test_ok_with_none_value():
    assert Result.ok(None).is_ok


@pytest.mark.parametrize(
    "error, status",
    [
        (not_found("missing"), 404),
        (conflict("dup"), 409),
        (forbidden("nope"), 403),
        (invalid("bad"), 422),
    ],
)
def test_fail_unwrap_raises_http_status(error, status):
    result = Result.fail(error)
    assert not result.is_ok
    with pytest.raises(HTTPException) as exc_info:
        result.unwrap()
    assert exc_info.value.status_code == status
    assert exc_info.value.detail == error.message


def test_error_kinds():
    assert not_found("x").kind == ErrorKind.NOT_FOUND
    assert conflict("x").kind == ErrorKind.CONFLICT
