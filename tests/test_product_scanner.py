import pytest

from storefront_e2e.core.exceptions import NoListingsError, RetryExhaustedError
from storefront_e2e.flows.criteria import BrandCategoryPriceCriteria, CategoryRefreshRateCriteria
from storefront_e2e.flows.product_scanner import ProductScanner
from storefront_e2e.models.listing import ListingCandidate
from tests.fakes import FakeElement, listing

CONTAINER = 'article[data-ref="product-item"]'
SAMSUNG_UNDER_15K = BrandCategoryPriceCriteria.build('Samsung', 15000, 'tv')


def scanner_for(page, **kwargs):
    kwargs.setdefault('settle_delay', 0)
    return ProductScanner(page, **kwargs)


class TestFirstMatch:

    @pytest.mark.asyncio
    async def test_first_in_display_order_not_cheapest(self, page):
        page.add(
            CONTAINER,
            listing('LG 65" OLED evo TV', 'R 24,999'),
            listing('Samsung 65" QLED Smart TV', 'R 12,999'),
            listing('Hisense 65" UHD TV', 'R 8,999'),
            listing('Samsung 65" Crystal UHD TV', 'R 9,999'),
        )

        selected = await scanner_for(page).find_first_match(SAMSUNG_UNDER_15K)

        assert selected.name == 'Samsung 65" QLED Smart TV'
        assert selected.position == 2
        assert selected.price == 12999.0

    @pytest.mark.asyncio
    async def test_broken_listing_is_skipped(self, page):
        page.add(
            CONTAINER,
            FakeElement(text='Ad'),
            listing('Samsung 55" Crystal UHD TV', 'R 7,499'),
        )

        selected = await scanner_for(page).find_first_match(SAMSUNG_UNDER_15K)

        assert selected.name == 'Samsung 55" Crystal UHD TV'
        assert selected.position == 2

    @pytest.mark.asyncio
    async def test_no_qualifying_listing_returns_none_without_retry(self, page, fake_sleep):
        page.add(
            CONTAINER,
            listing('Samsung 85" Neo QLED TV', 'R 59,999'),
            listing('LG 65" UHD TV', 'R 11,999'),
        )

        assert await scanner_for(page).find_first_match(SAMSUNG_UNDER_15K, sleep=fake_sleep) is None
        assert fake_sleep.delays == []

    @pytest.mark.asyncio
    async def test_unparseable_price_never_qualifies(self, page):
        page.add(CONTAINER, listing('Samsung 65" QLED TV', None, extra_text='Currently unavailable'))

        assert await scanner_for(page).find_first_match(SAMSUNG_UNDER_15K) is None

    @pytest.mark.asyncio
    async def test_monitor_refresh_rate(self, page):
        page.add(
            CONTAINER,
            listing('Dell 24" Office Monitor 60Hz', 'R 2,199'),
            listing('Samsung Odyssey G5 27" 144Hz Gaming Monitor', 'R 4,999'),
        )

        selected = await scanner_for(page).find_first_high_refresh_rate_monitor(120)

        assert selected.refresh_rate == 144

    @pytest.mark.asyncio
    async def test_plain_callable_criteria(self, page):
        page.add(CONTAINER, listing('Sony Bravia TV', 'R 19,999'), listing('TCL 43" TV', 'R 4,299'))

        selected = await scanner_for(page).find_first_match(lambda c: c.price < 5000, 'budget tv')

        assert selected.name == 'TCL 43" TV'

    @pytest.mark.asyncio
    async def test_only_first_listings_scanned(self, page):
        page.add(
            CONTAINER,
            listing('LG 65" OLED TV', 'R 24,999'),
            listing('Sony 65" Bravia TV', 'R 21,999'),
            listing('Samsung 65" Crystal UHD TV', 'R 9,999'),
        )

        assert await scanner_for(page, max_listings=2).find_first_match(SAMSUNG_UNDER_15K) is None

    @pytest.mark.asyncio
    async def test_raising_criteria_skips_only_that_listing(self, page):
        # Dell has no refresh rate, so the comparison raises TypeError for it
        page.add(
            CONTAINER,
            listing('Dell 24" Office Monitor', 'R 2,199'),
            listing('Samsung Odyssey G5 27" 144Hz Gaming Monitor', 'R 4,999'),
        )

        selected = await scanner_for(page).find_first_match(lambda c: c.refresh_rate >= 120, 'fast monitor')

        assert selected.position == 2
        assert selected.name == 'Samsung Odyssey G5 27" 144Hz Gaming Monitor'

    @pytest.mark.asyncio
    async def test_earliest_of_several_matches(self, page):
        page.add(
            CONTAINER,
            listing('LG 65" OLED TV', 'R 24,999'),
            listing('Samsung 65" QLED TV', 'R 13,999'),
            listing('Sony 65" Bravia TV', 'R 21,999'),
            listing('Samsung 65" Crystal UHD TV', 'R 9,999'),
            listing('Hisense 65" UHD TV', 'R 8,999'),
        )

        selected = await scanner_for(page).find_first_match(SAMSUNG_UNDER_15K)

        assert selected.position == 2
        assert selected.name == 'Samsung 65" QLED TV'


class TestEmptyResults:

    @pytest.mark.asyncio
    async def test_scan_raises_on_empty_view(self, page):
        with pytest.raises(NoListingsError):
            await scanner_for(page).scan(SAMSUNG_UNDER_15K)

    @pytest.mark.asyncio
    async def test_empty_view_retried_then_fails(self, page, fake_sleep):
        with pytest.raises(RetryExhaustedError) as exc_info:
            await scanner_for(page).find_first_match(SAMSUNG_UNDER_15K, sleep=fake_sleep)

        assert isinstance(exc_info.value.last_error, NoListingsError)
        assert exc_info.value.attempts == 3
        assert fake_sleep.delays == [2.0, 4.0]

    @pytest.mark.asyncio
    async def test_settle_delay_before_scanning(self, page):
        page.add(CONTAINER, listing('Samsung 55" TV', 'R 7,999'))

        await ProductScanner(page, settle_delay=1.5).find_first_samsung_tv_within_price(15000)

        assert page.waits == [1.5]


class TestExtraction:

    @pytest.mark.asyncio
    async def test_candidate_fields(self, page):
        container = listing('Samsung 65" DU7010 4K UHD', 'R 10,499', extra_text='Free delivery')

        candidate = await scanner_for(page).extract_candidate(container, 3)

        assert candidate == ListingCandidate(
            name='Samsung 65" DU7010 4K UHD',
            price_text='R 10,499',
            raw_text='Samsung 65" DU7010 4K UHD\nR 10,499\nFree delivery',
            position=3,
        )

    @pytest.mark.asyncio
    async def test_name_falls_back_to_container_text(self, page):
        container = FakeElement(text='4.5\nHisense 55" A6 UHD Smart TV\nR 6,999')
        container.add('[data-ref="price"]', FakeElement('R 6,999'))

        assert await scanner_for(page).get_product_name(container) == 'Hisense 55" A6 UHD Smart TV'

    @pytest.mark.asyncio
    async def test_price_falls_back_to_container_text(self, page):
        container = FakeElement(text='Samsung Galaxy Tab A9\nFrom R 2,749\nIn stock')

        assert await scanner_for(page).get_product_price(container) == 'From R 2,749'


class TestCriteria:

    def test_explain_lists_every_reason(self):
        candidate = ListingCandidate(name='LG 65" Soundbar', price_text='R 20,000')

        reasons = SAMSUNG_UNDER_15K.explain(candidate)

        assert len(reasons) == 3
        assert not SAMSUNG_UNDER_15K(candidate)

    def test_category_optional(self):
        criteria = BrandCategoryPriceCriteria.build('Samsung', 15000)
        assert criteria(ListingCandidate(name='Samsung 65" DU7010 4K UHD', price_text='R 10,499'))
        assert str(criteria) == 'Samsung under R 15,000'

    def test_refresh_rate_reasons(self):
        criteria = CategoryRefreshRateCriteria.build('monitor', 120)

        assert criteria.explain(ListingCandidate(name='Dell Monitor', price_text='R 1,999')) == [
            'No refresh rate found in: Dell Monitor'
        ]
        assert criteria.explain(ListingCandidate(name='Dell Monitor 75Hz', price_text='R 1,999')) == [
            'Refresh rate too low: 75Hz < 120Hz required'
        ]
        assert criteria(ListingCandidate(name='Dell Monitor 120Hz', price_text='R 2,999'))

    def test_criteria_are_immutable(self):
        with pytest.raises(Exception):
            SAMSUNG_UNDER_15K.max_price = 99999
