from __future__ import annotations

from typing import Callable

from tenacity import RetryError, Retrying, retry_if_result, stop_after_delay, wait_fixed


def wait_until(
    condition: Callable[[], bool],
    *,
    timeout_seconds: float,
    interval_seconds: float,
    description: str,
) -> None:
    """
    Poll `condition` until it returns a truthy value.

    Raises TimeoutError once `timeout_seconds` have elapsed without success.
    Exceptions raised by `condition` propagate immediately.
    """
    retryer = Retrying(
        stop=stop_after_delay(timeout_seconds),
        wait=wait_fixed(interval_seconds),
        retry=retry_if_result(lambda ok: not ok),
    )
    try:
        retryer(condition)
    except RetryError as e:
        raise TimeoutError(f"Timed out after {timeout_seconds:g}s waiting for {description}") from e
