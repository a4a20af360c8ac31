"""
Exception hierarchy for the selection and interaction layer
"""

from typing import Iterable, List, Optional


class StorefrontE2EError(Exception):
    """Base class for every failure raised by storefront_e2e"""


class ScenarioConfigError(StorefrontE2EError, ValueError):
    """Scenario configuration is incomplete or contradictory"""


class ElementNotFoundError(StorefrontE2EError):
    """No element located after every strategy was exhausted"""

    def __init__(self, target: str, tried: Optional[Iterable[str]] = None, detail: str = ''):
        self.target = target
        self.tried: List[str] = list(tried or [])
        message = f"Could not locate {target}"
        if detail:
            message = f"{message}: {detail}"
        if self.tried:
            message = f"{message} (tried {len(self.tried)} strategies: {'; '.join(self.tried)})"
        super().__init__(message)


class NoListingsError(ElementNotFoundError):
    """Results view yielded zero listing containers"""

    def __init__(self, tried: Optional[Iterable[str]] = None):
        super().__init__(
            'product listings',
            tried,
            'no product containers found on the page - search may have failed or page not loaded'
        )


class OperationTimeoutError(StorefrontE2EError, TimeoutError):
    """A single browser operation exceeded its timeout"""

    def __init__(self, description: str, timeout: float):
        self.description = description
        self.timeout = timeout
        super().__init__(f"{description}: operation timeout after {timeout}s")


class NetworkError(StorefrontE2EError):
    """A failure whose message matches a known network pattern"""

    def __init__(self, description: str, cause: BaseException):
        self.description = description
        self.cause = cause
        super().__init__(
            f"Network error during {description}: {cause}. "
            f"Consider enabling retry for network operations."
        )


class RetryExhaustedError(StorefrontE2EError):
    """Every retry attempt failed; carries the last cause"""

    def __init__(self, description: str, attempts: int, last_error: BaseException):
        self.description = description
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"{description} failed after {attempts} attempts: {last_error}")


class FallbackFailedError(StorefrontE2EError):
    """Both the primary and the fallback operation failed"""

    def __init__(self, description: str, primary_error: BaseException, fallback_error: BaseException):
        self.description = description
        self.primary_error = primary_error
        self.fallback_error = fallback_error
        super().__init__(
            f"Both primary and fallback operations failed for {description}. "
            f"Primary: {primary_error}, Fallback: {fallback_error}"
        )


class DataValidationError(StorefrontE2EError, ValueError):
    """One or more validation rules failed; lists every failure"""

    def __init__(self, label: str, failures: Iterable[str]):
        self.label = label
        self.failures: List[str] = list(failures)
        super().__init__(f"{label} validation failed: {', '.join(self.failures)}")


class ClickFailedError(StorefrontE2EError):
    """Normal, forced and script-level clicks all failed"""

    def __init__(self, description: str, errors: Iterable[str]):
        self.description = description
        self.errors: List[str] = list(errors)
        super().__init__(f"Could not click {description}: {' | '.join(self.errors)}")


class VerificationError(StorefrontE2EError, AssertionError):
    """Expected listing is absent from the target view"""
