import httpx
import pytest

from teamtodo.services.http_service import backoff_delay, request_with_retries


def _responses(*statuses):
    calls = {"count": 0}

    def request_fn():
        status = statuses[min(calls["count"], len(statuses) - 1)]
        calls["count"] += 1
        return httpx.Response(status)

    return request_fn, calls


def test_retries_retryable_status_then_succeeds():
    request_fn, calls = _responses(503, 502, 200)
    delays = []

    response = request_with_retries(request_fn, base_delay=0.1, sleep=delays.append)

    assert response.status_code == 200
    assert calls["count"] == 3
    assert len(delays) == 2


def test_returns_last_response_when_attempts_exhausted():
    request_fn, calls = _responses(429)

    response = request_with_retries(request_fn, max_attempts=2, sleep=lambda _d: None)

    assert response.status_code == 429
    assert calls["count"] == 2


def test_non_retryable_status_returns_immediately():
    request_fn, calls = _responses(400, 200)

    response = request_with_retries(request_fn, sleep=lambda _d: None)

    assert response.status_code == 400
    assert calls["count"] == 1


def test_request_error_reraised_after_last_attempt():
    calls = {"count": 0}

    def request_fn():
        calls["count"] += 1
        raise httpx.ConnectTimeout("timed out")

    with pytest.raises(httpx.ConnectTimeout):
        request_with_retries(request_fn, max_attempts=3, sleep=lambda _d: None)

    assert calls["count"] == 3


@pytest.mark.parametrize(
    "attempt,low,high",
    [(0, 0.5, 0.75), (1, 1.0, 1.5), (2, 2.0, 3.0), (5, 4.0, 6.0)],
)
def test_backoff_delay_is_capped_with_bounded_jitter(attempt, low, high):
    delay = backoff_delay(attempt, base_delay=0.5, max_delay=4.0)
    assert low <= delay <= high


def test_backoff_delay_zero_base_means_no_wait():
    assert backoff_delay(3, base_delay=0, max_delay=4.0) == 0


def test_connection_errors_and_retryable_statuses_back_off_alike():
    outcomes = iter([httpx.ConnectError("refused"), httpx.Response(503), httpx.Response(200)])

    def request_fn():
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    delays = []
    response = request_with_retries(
        request_fn, base_delay=1.0, max_delay=8.0, sleep=delays.append
    )

    assert response.status_code == 200
    assert 1.0 <= delays[0] <= 1.5
    assert 2.0 <= delays[1] <= 3.0
