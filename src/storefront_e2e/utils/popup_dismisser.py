#!/usr/bin/env python3
"""Dismiss notification banners, cookie prompts and blocking modals"""

from typing import Optional

from storefront_e2e.core.logger_config import component_logger
from storefront_e2e.dom.browser import PageQuery
from storefront_e2e.dom.service import LocatorStrategySet, LocatorTarget, click_with_escalation

logger = component_logger('POPUPS', source='popup_dismisser')


async def try_dismiss_notification(page: PageQuery, descriptor, timeout: float = 2.0, log=None) -> bool:
    """Click the first visible element for one dismiss descriptor"""
    log = log or logger
    try:
        elements = await page.find_all(descriptor, limit=1)
        if elements and await elements[0].is_visible(timeout=timeout):
            await click_with_escalation(elements[0], f"notification '{descriptor}'", logger=log)
            log.info(f"Dismissed notification using selector: {descriptor}")
            await page.wait(1)
            return True
    except Exception as e:
        log.debug(f"Dismiss selector '{descriptor}' failed: {e}")
    return False


async def try_dismiss_modal(page: PageQuery, locators: LocatorStrategySet, timeout: float = 1.0, log=None) -> bool:
    """When a page blocker is up, close its parent dialog"""
    log = log or logger
    try:
        blocker = await locators.first_visible(page, LocatorTarget.PAGE_BLOCKER, timeout=timeout)
        if blocker is None:
            return False

        log.warning("Page blocker detected, trying to dismiss parent modal")
        modal = await locators.first_visible(page, LocatorTarget.OVERLAY, timeout=timeout)
        if modal is None:
            return False

        close_button = await locators.first_visible(modal, LocatorTarget.OVERLAY_CLOSE, timeout=timeout)
        if close_button is None:
            return False

        await click_with_escalation(close_button, 'modal close button', logger=log)
        log.info("Dismissed modal dialog")
        return True
    except Exception as e:
        log.debug(f"Modal dismissal failed: {e}")
        return False


async def dismiss_popups(
    page: PageQuery,
    locators: Optional[LocatorStrategySet] = None,
    rounds: int = 3,
    settle_delay: float = 2.0,
    logger=None,
) -> int:
    """
    Sweep the dismiss selectors and blocking modals a few times; banners
    often appear late. Never raises.

    Returns:
        Number of elements dismissed
    """
    log = component_logger('POPUPS', logger, source='popup_dismisser')
    locators = locators or LocatorStrategySet(logger=log.logger)
    dismissed_count = 0

    for attempt in range(rounds):
        log.info(f"Dismissing notifications - attempt {attempt + 1}")

        for descriptor in locators.descriptors(LocatorTarget.NOTIFICATION_DISMISS):
            if await try_dismiss_notification(page, descriptor, log=log):
                dismissed_count += 1

        if await try_dismiss_modal(page, locators, log=log):
            dismissed_count += 1

        if settle_delay:
            await page.wait(settle_delay)

    log.info(f"Finished dismissing notifications ({dismissed_count} dismissed)")
    return dismissed_count
