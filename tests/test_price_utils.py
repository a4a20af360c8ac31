import pytest

from storefront_e2e.utils.price_utils import (
    extract_price_text,
    format_price,
    is_price_within_limit,
    looks_like_price,
    parse_price,
)


class TestParsePrice:

    @pytest.mark.parametrize('text, expected', [
        ('R 10,499', 10499.0),
        ('R10,499', 10499.0),
        ('R10499', 10499.0),
        ('From R 2,749', 2749.0),
        ('R 1,299.99', 1299.99),
        ('R 1,249,000', 1249000.0),
    ])
    def test_rand_formats(self, text, expected):
        assert parse_price(text) == expected

    @pytest.mark.parametrize('text', [None, '', 'Out of stock', 'Call for price', 'HDR10 panel'])
    def test_unparseable_is_none_not_zero(self, text):
        assert parse_price(text) is None

    def test_first_amount_wins(self):
        assert parse_price('R 9,999 was R 12,999') == 9999.0

    def test_newline_does_not_join_numbers(self):
        """Container text puts the price and the next title line on separate lines"""
        assert parse_price('R 10,499\n120Hz') == 10499.0

    @pytest.mark.parametrize('text', ['R 15 001', 'R 15\u00a0001', 'R15 001'])
    def test_space_grouped_thousands(self, text):
        assert parse_price(text) == 15001.0


class TestPriceLimit:

    def test_ceiling_is_inclusive(self):
        assert is_price_within_limit('R 15,000', 15000)

    def test_above_ceiling(self):
        assert not is_price_within_limit('R 15,001', 15000)

    def test_space_grouped_above_ceiling(self):
        assert not is_price_within_limit('R 15 001', 15000)

    def test_unparseable_never_qualifies(self):
        assert not is_price_within_limit('Out of stock', 15000)
        assert not is_price_within_limit(None, 15000)


class TestFormatting:

    def test_whole_rands(self):
        assert format_price(10499) == 'R 10,499'

    def test_cents(self):
        assert format_price(99.5) == 'R 99.50'


class TestFreeTextExtraction:

    def test_range_format_preferred(self):
        text = 'Samsung Galaxy Tab\nFrom R 2,749\nR 3,199'
        assert extract_price_text(text) == 'From R 2,749'

    def test_standard_format(self):
        assert extract_price_text('Samsung 65" DU7010 4K UHD\nR 10,499\n4.5 stars') == 'R 10,499'

    def test_no_price(self):
        assert extract_price_text('Samsung 65" DU7010 4K UHD') is None
        assert extract_price_text('') is None

    def test_looks_like_price(self):
        assert looks_like_price('R 10,499')
        assert not looks_like_price('10,499')
        assert not looks_like_price('Free delivery')
