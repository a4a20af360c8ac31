#!/usr/bin/env python3
"""
Browser collaborator contract and its Playwright implementation.

The selection layer only ever talks to PageQuery / ElementHandle. Tests
drive the same flows with an in-memory page.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, runtime_checkable

from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Descriptor:
    """
    One way of finding elements: a Playwright/CSS selector, optionally
    narrowed to elements whose text contains has_text.

    Selectors may carry a {fragment} placeholder, filled by render().
    """
    selector: str
    has_text: Optional[str] = None
    label: str = ''

    def __str__(self):
        if self.label:
            return self.label
        if self.has_text:
            return f'{self.selector} >> has_text="{self.has_text}"'
        return self.selector

    def render(self, fragment: str) -> 'Descriptor':
        """Fill the {fragment} placeholder; has_text '{fragment}' is replaced verbatim"""
        selector = self.selector.replace('{fragment}', css_escape(fragment))
        has_text = self.has_text
        if has_text is not None:
            has_text = has_text.replace('{fragment}', fragment)
        label = self.label.replace('{fragment}', fragment) if self.label else ''
        return Descriptor(selector=selector, has_text=has_text, label=label)


def css_escape(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute selector"""
    return value.replace('\\', '\\\\').replace('"', '\\"')


@runtime_checkable
class ElementHandle(Protocol):
    async def read_text(self, timeout: float = 2.0) -> str: ...

    async def is_visible(self, timeout: float = 2.0) -> bool: ...

    async def click(self, force: bool = False, timeout: float = 5.0) -> None: ...

    async def script_click(self) -> None: ...

    async def find_all(self, descriptor: Descriptor, limit: Optional[int] = None) -> List['ElementHandle']: ...


@runtime_checkable
class PageQuery(Protocol):
    @property
    def url(self) -> str: ...

    async def navigate(self, url: str, timeout: float = 30.0) -> None: ...

    async def find_all(self, descriptor: Descriptor, limit: Optional[int] = None) -> List[ElementHandle]: ...

    async def fill(self, descriptor: Descriptor, text: str, timeout: float = 10.0) -> None: ...

    async def press_key(self, descriptor: Descriptor, key: str, timeout: float = 10.0) -> None: ...

    async def wait(self, seconds: float) -> None: ...


def _ms(seconds: float) -> float:
    return seconds * 1000


def _narrow(locator: Locator, descriptor: Descriptor) -> Locator:
    if descriptor.has_text:
        return locator.filter(has_text=descriptor.has_text)
    return locator


async def _expand(locator: Locator, limit: Optional[int]) -> List['PlaywrightElement']:
    count = await locator.count()
    if limit is not None:
        count = min(count, limit)
    return [PlaywrightElement(locator.nth(i)) for i in range(count)]


class PlaywrightElement:
    """ElementHandle over a single Playwright locator"""

    def __init__(self, locator: Locator):
        self.locator = locator

    async def read_text(self, timeout: float = 2.0) -> str:
        text = await self.locator.text_content(timeout=_ms(timeout))
        return text or ''

    async def is_visible(self, timeout: float = 2.0) -> bool:
        try:
            await self.locator.wait_for(state='visible', timeout=_ms(timeout))
            return True
        except PlaywrightTimeoutError:
            return False

    async def click(self, force: bool = False, timeout: float = 5.0) -> None:
        await self.locator.scroll_into_view_if_needed(timeout=_ms(timeout))
        await self.locator.click(force=force, timeout=_ms(timeout))

    async def script_click(self) -> None:
        await self.locator.evaluate('el => el.click()')

    async def find_all(self, descriptor: Descriptor, limit: Optional[int] = None) -> List['PlaywrightElement']:
        return await _expand(_narrow(self.locator.locator(descriptor.selector), descriptor), limit)


class PlaywrightPageQuery:
    """PageQuery over a Playwright page"""

    def __init__(self, page: Page):
        self.page = page

    @property
    def url(self) -> str:
        return self.page.url

    async def navigate(self, url: str, timeout: float = 30.0) -> None:
        logger.info(f"Navigating to {url}")
        await self.page.goto(url, timeout=_ms(timeout), wait_until='domcontentloaded')

    async def find_all(self, descriptor: Descriptor, limit: Optional[int] = None) -> List[PlaywrightElement]:
        return await _expand(_narrow(self.page.locator(descriptor.selector), descriptor), limit)

    def _first(self, descriptor: Descriptor) -> Locator:
        return _narrow(self.page.locator(descriptor.selector), descriptor).first

    async def fill(self, descriptor: Descriptor, text: str, timeout: float = 10.0) -> None:
        field = self._first(descriptor)
        await field.wait_for(state='visible', timeout=_ms(timeout))
        await field.click(timeout=_ms(timeout))
        await field.fill(text, timeout=_ms(timeout))

    async def press_key(self, descriptor: Descriptor, key: str, timeout: float = 10.0) -> None:
        field = self._first(descriptor)
        await field.press(key, timeout=_ms(timeout))

    async def wait(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
