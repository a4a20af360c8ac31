import logging

import pytest

from storefront_e2e.core.config import StorefrontConfig
from storefront_e2e.core.logger_config import ComponentLogger, StorefrontFormatter, component_logger


class TestStorefrontConfig:

    def test_defaults(self):
        assert StorefrontConfig.get_base_url() == StorefrontConfig.DEFAULT_BASE_URL
        assert StorefrontConfig.get_settle_delay() == 3.0
        assert StorefrontConfig.get_max_listings() == 10
        assert StorefrontConfig.get_default_timeout() == 5.0
        assert StorefrontConfig.get_cart_fallback_listing() == 'Samsung 65" DU7010 4K UHD'
        assert StorefrontConfig.get_wishlist_fallback_listing() is None

    @pytest.mark.parametrize('value, expected', [('false', False), ('0', False), ('true', True), ('', True)])
    def test_headless(self, monkeypatch, value, expected):
        monkeypatch.setenv('E2E_HEADLESS', value)
        assert StorefrontConfig.get_headless() is expected

    def test_numbers_from_environment(self, monkeypatch):
        monkeypatch.setenv('E2E_SETTLE_DELAY', '0.5')
        monkeypatch.setenv('E2E_MAX_LISTINGS', '25')
        assert StorefrontConfig.get_settle_delay() == 0.5
        assert StorefrontConfig.get_max_listings() == 25

    def test_bad_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv('E2E_MAX_LISTINGS', 'lots')
        monkeypatch.setenv('E2E_DEFAULT_TIMEOUT', 'soon')
        assert StorefrontConfig.get_max_listings() == 10
        assert StorefrontConfig.get_default_timeout() == 5.0

    def test_max_listings_at_least_one(self, monkeypatch):
        monkeypatch.setenv('E2E_MAX_LISTINGS', '-3')
        assert StorefrontConfig.get_max_listings() == 1

    def test_empty_fallback_disables_it(self, monkeypatch):
        monkeypatch.setenv('E2E_CART_FALLBACK_LISTING', '')
        assert StorefrontConfig.get_cart_fallback_listing() is None


class TestLogging:

    def test_component_and_source_in_line(self):
        record = logging.LogRecord('storefront_e2e', logging.INFO, __file__, 1, 'Found %d products', (4,), None)
        record.component = 'SCANNER'
        record.source = 'product_scanner'

        line = StorefrontFormatter(use_color=False).format(record)

        assert line.endswith(' - INFO - [SCANNER] - [product_scanner] - Found 4 products')

    def test_defaults_without_extra(self):
        record = logging.LogRecord('storefront_e2e.dom.browser', logging.WARNING, __file__, 1, 'slow', (), None)

        line = StorefrontFormatter(use_color=False).format(record)

        assert '[SYSTEM] - [browser] - slow' in line

    def test_component_logger_passthrough(self):
        adapter = component_logger('SCANNER', source='product_scanner')

        assert isinstance(adapter, ComponentLogger)
        assert component_logger('VERIFY', adapter) is adapter
        assert adapter.extra == {'component': 'SCANNER', 'source': 'product_scanner'}

    def test_adapter_merges_extra(self):
        adapter = component_logger('SCANNER')
        _, kwargs = adapter.process('msg', {'extra': {'source': 'test'}})
        assert kwargs['extra'] == {'component': 'SCANNER', 'source': 'test'}
