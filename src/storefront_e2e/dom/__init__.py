# DOM package: browser collaborator contract and locator strategies
from .browser import Descriptor, ElementHandle, PageQuery, PlaywrightElement, PlaywrightPageQuery
from .service import LocatorStrategySet, LocatorTarget, StrategyMatch, click_with_escalation

__all__ = [
    'Descriptor', 'ElementHandle', 'PageQuery', 'PlaywrightElement', 'PlaywrightPageQuery',
    'LocatorStrategySet', 'LocatorTarget', 'StrategyMatch', 'click_with_escalation',
]
