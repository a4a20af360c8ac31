#!/usr/bin/env python3
"""
Centralized error handling for robust test execution

Standard patterns for unreliable browser work:
- Retry with exponential backoff
- Timeout race with optional fallback
- Aggregated data validation
- Graceful degradation for optional steps
- Network-aware retry
"""

import asyncio
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar

from storefront_e2e.core.exceptions import (
    DataValidationError,
    FallbackFailedError,
    NetworkError,
    OperationTimeoutError,
    RetryExhaustedError,
)
from storefront_e2e.core.logger_config import component_logger
from storefront_e2e.models.listing import RetryPolicy

T = TypeVar('T')

logger = component_logger('RESILIENCE', source='error_handler')

NETWORK_RETRY_POLICY = RetryPolicy(max_attempts=3, base_delay=2.0, description='network operation')

NETWORK_ERROR_PATTERNS = [
    re.compile(r'net::', re.IGNORECASE),
    re.compile(r'timeout', re.IGNORECASE),
    re.compile(r'connection', re.IGNORECASE),
    re.compile(r'network', re.IGNORECASE),
    re.compile(r'dns', re.IGNORECASE),
    re.compile(r'unreachable', re.IGNORECASE),
]


def is_network_error(error: BaseException) -> bool:
    message = str(error)
    return any(pattern.search(message) for pattern in NETWORK_ERROR_PATTERNS)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    description: str = 'operation',
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    log=None,
) -> T:
    """
    Await operation() up to max_attempts times with exponential backoff.

    The delay after attempt k is base_delay * 2**(k-1). The operation must be
    safe to repeat.

    Raises:
        RetryExhaustedError: chained from the last failure
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    log = log or logger
    last_error: Optional[BaseException] = None

    for attempt in range(1, max_attempts + 1):
        try:
            result = await operation()
            if attempt > 1:
                log.info(f"{description} succeeded on attempt {attempt}")
            return result
        except Exception as e:
            last_error = e

            if attempt == max_attempts:
                log.error(f"{description} failed after {max_attempts} attempts: {e}")
                break

            delay = base_delay * 2 ** (attempt - 1)
            log.warning(f"{description} failed on attempt {attempt}/{max_attempts}, retrying in {delay}s: {e}")
            await sleep(delay)

    raise RetryExhaustedError(description, max_attempts, last_error) from last_error


async def retry_with_policy(operation: Callable[[], Awaitable[T]], policy: RetryPolicy, **kwargs) -> T:
    return await retry_with_backoff(
        operation,
        max_attempts=policy.max_attempts,
        base_delay=policy.base_delay,
        description=policy.description,
        **kwargs,
    )


class _RaisedByOperation(Exception):
    """Carries an error the operation raised itself through wait_for"""

    def __init__(self, error: BaseException):
        super().__init__(str(error))
        self.error = error


async def safe_element_operation(
    operation: Callable[[], Awaitable[T]],
    fallback: Optional[Callable[[], Awaitable[T]]] = None,
    timeout: float = 10.0,
    description: str = 'element operation',
    log=None,
) -> T:
    """
    Race operation() against a timeout, then fall back if it fails.

    Without a fallback the primary error propagates; only this call's own
    timeout surfaces as OperationTimeoutError, a TimeoutError raised inside
    operation() propagates as it is. When the fallback also fails,
    FallbackFailedError carries both causes.
    """
    log = log or logger

    async def guarded():
        try:
            return await operation()
        except Exception as e:
            raise _RaisedByOperation(e) from e

    try:
        return await asyncio.wait_for(guarded(), timeout=timeout)
    except _RaisedByOperation as e:
        primary_error: Exception = e.error
    except asyncio.TimeoutError as e:
        primary_error = OperationTimeoutError(description, timeout)
        primary_error.__cause__ = e

    log.warning(f"Primary {description} failed: {primary_error}")

    if fallback is None:
        raise primary_error

    try:
        log.info(f"Attempting fallback for {description}")
        return await fallback()
    except Exception as fallback_error:
        log.error(f"Fallback also failed for {description}: {fallback_error}")
        raise FallbackFailedError(description, primary_error, fallback_error) from fallback_error


@dataclass(frozen=True)
class ValidationRule:
    """A predicate over the data plus the message reported when it fails"""
    check: Callable[[Any], bool]
    message: str


def validate_data(data: Any, rules: Sequence[ValidationRule], label: str = 'data') -> None:
    """
    Evaluate every rule and report all failures in one error.

    Raises:
        DataValidationError: listing every failing rule's message
    """
    failures = []
    for rule in rules:
        try:
            valid = bool(rule.check(data))
        except Exception as e:
            valid = False
            failures.append(f"{rule.message} ({e})")
            continue
        if not valid:
            failures.append(rule.message)

    if failures:
        raise DataValidationError(label, failures)


async def with_graceful_degradation(
    operation: Callable[[], Awaitable[T]],
    fallback_value: T,
    description: str = 'operation',
    log=None,
) -> T:
    """Return fallback_value instead of propagating; for optional steps only"""
    log = log or logger
    try:
        return await operation()
    except Exception as e:
        log.warning(f"{description} failed gracefully, using default value: {e}")
        return fallback_value


async def with_network_resilience(
    operation: Callable[[], Awaitable[T]],
    should_retry: bool = True,
    description: str = 'network operation',
    policy: RetryPolicy = NETWORK_RETRY_POLICY,
    **retry_kwargs,
) -> T:
    """
    Retry with tuned constants, or annotate network failures when not retrying.
    """
    if should_retry:
        return await retry_with_backoff(
            operation,
            max_attempts=policy.max_attempts,
            base_delay=policy.base_delay,
            description=f"{description} (network resilient)",
            **retry_kwargs,
        )

    try:
        return await operation()
    except Exception as e:
        if is_network_error(e):
            raise NetworkError(description, e) from e
        raise


class ErrorCollector:
    """Per-item error containment with one aggregated summary"""

    def __init__(self, description: str, log=None):
        self.description = description
        self.errors: List[Tuple[str, BaseException]] = []
        self.log = log or logger

    def add(self, context: str, error: BaseException) -> None:
        self.errors.append((context, error))
        self.log.warning(f"{context} failed: {error}")

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    @property
    def messages(self) -> List[str]:
        return [f"{context}: {error}" for context, error in self.errors]

    def log_summary(self, total: int) -> None:
        if self.errors:
            self.log.warning(f"{len(self.errors)}/{total} items had errors during {self.description}")
