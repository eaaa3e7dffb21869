"""
Tests for the bounded retry helper.
"""
import pytest

from stormgr.errors import ConnectionFailedError, InvalidRequestError
from stormgr.retry import retry


def test_first_success_short_circuits():
    calls = []

    result = retry(5, 0, lambda: calls.append(1) or "ok", "work")

    assert result == "ok"
    assert len(calls) == 1


def test_retries_until_success():
    attempts = {"count": 0}

    def work():
        attempts["count"] += 1
        if attempts["count"] < 3:
            raise ConnectionFailedError("not yet")
        return attempts["count"]

    assert retry(5, 0, work, "work") == 3


def test_raises_last_error_after_budget():
    attempts = {"count": 0}

    def work():
        attempts["count"] += 1
        raise ConnectionFailedError(f"failure {attempts['count']}")

    with pytest.raises(ConnectionFailedError, match="failure 4"):
        retry(4, 0, work, "work")
    assert attempts["count"] == 4


def test_unlisted_errors_are_not_retried():
    attempts = {"count": 0}

    def work():
        attempts["count"] += 1
        raise InvalidRequestError("bad input")

    with pytest.raises(InvalidRequestError):
        retry(4, 0, work, "work", retry_on=(ConnectionFailedError,))
    assert attempts["count"] == 1


def test_zero_attempts_still_tries_once():
    assert retry(0, 0, lambda: 42, "work") == 42


def test_single_attempt_raises_its_error():
    def work():
        raise ConnectionFailedError("only try")

    with pytest.raises(ConnectionFailedError, match="only try"):
        retry(1, 0, work, "work")
