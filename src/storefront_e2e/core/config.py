import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    try:
        return float(value) if value else default
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    try:
        return int(value) if value else default
    except ValueError:
        return default


class StorefrontConfig:
    """
    Central configuration management for Storefront E2E.
    Handles environment variables, timeouts and fixed fallbacks.
    """

    DEFAULT_BASE_URL = 'https://www.takealot.com/'
    CURRENCY_PREFIX = 'R'

    @staticmethod
    def get_base_url() -> str:
        return os.getenv('STOREFRONT_BASE_URL', StorefrontConfig.DEFAULT_BASE_URL)

    @staticmethod
    def get_headless() -> bool:
        return _env_bool('E2E_HEADLESS', True)

    @staticmethod
    def get_browser_channel():
        # None means Playwright's bundled chromium
        return os.getenv('E2E_BROWSER_CHANNEL') or None

    @staticmethod
    def get_default_timeout() -> float:
        """Per-operation timeout in seconds"""
        return _env_float('E2E_DEFAULT_TIMEOUT', 5.0)

    @staticmethod
    def get_settle_delay() -> float:
        """Seconds to let the results view settle before scanning"""
        return _env_float('E2E_SETTLE_DELAY', 3.0)

    @staticmethod
    def get_max_listings() -> int:
        return max(1, _env_int('E2E_MAX_LISTINGS', 10))

    @staticmethod
    def get_log_level() -> str:
        return os.getenv('E2E_LOG_LEVEL', 'INFO')

    @staticmethod
    def get_cart_fallback_listing():
        return os.getenv('E2E_CART_FALLBACK_LISTING', 'Samsung 65" DU7010 4K UHD') or None

    @staticmethod
    def get_wishlist_fallback_listing():
        return os.getenv('E2E_WISHLIST_FALLBACK_LISTING') or None

    @staticmethod
    def is_live_enabled() -> bool:
        return _env_bool('E2E_LIVE', False)
