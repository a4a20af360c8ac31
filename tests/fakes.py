"""
In-memory PageQuery / ElementHandle doubles.

Elements are registered per selector string; a Descriptor's has_text narrows
them by substring of the element's text, exactly like Locator.filter.
"""

from typing import Callable, Dict, Iterable, List, Optional

from storefront_e2e.dom.browser import Descriptor


def _select(elements: Iterable['FakeElement'], descriptor: Descriptor, limit: Optional[int]) -> List['FakeElement']:
    found = [e for e in elements if descriptor.has_text is None or descriptor.has_text in e.text]
    if limit is not None:
        found = found[:limit]
    return found


class FakeElement:

    def __init__(
        self,
        text: str = '',
        visible: bool = True,
        children: Optional[Dict[str, List['FakeElement']]] = None,
        failing_clicks: Iterable[str] = (),
        on_click: Optional[Callable[[], None]] = None,
        read_error: Optional[Exception] = None,
    ):
        self.text = text
        self.visible = visible
        self.children = children or {}
        self.failing_clicks = set(failing_clicks)
        self.on_click = on_click
        self.read_error = read_error
        self.clicks: List[str] = []

    def add(self, selector: str, *elements: 'FakeElement') -> 'FakeElement':
        self.children.setdefault(selector, []).extend(elements)
        return self

    async def read_text(self, timeout: float = 2.0) -> str:
        if self.read_error is not None:
            raise self.read_error
        return self.text

    async def is_visible(self, timeout: float = 2.0) -> bool:
        return self.visible

    def _activate(self, method: str) -> None:
        if method in self.failing_clicks:
            raise RuntimeError(f"{method} intercepted by overlay")
        self.clicks.append(method)
        if self.on_click is not None:
            self.on_click()

    async def click(self, force: bool = False, timeout: float = 5.0) -> None:
        self._activate('force_click' if force else 'click')

    async def script_click(self) -> None:
        self._activate('script_click')

    async def find_all(self, descriptor: Descriptor, limit: Optional[int] = None) -> List['FakeElement']:
        return _select(self.children.get(descriptor.selector, []), descriptor, limit)


class FakePage:
    """
    A page made of named views; clicking a link element can switch views
    (e.g. results -> cart).
    """

    def __init__(self, view: str = 'results'):
        self.views: Dict[str, Dict[str, List[FakeElement]]] = {view: {}}
        self.current = view
        self.url = 'about:blank'
        self.failing_selectors = set()
        self.visits: List[str] = []
        self.filled: List[tuple] = []
        self.pressed: List[tuple] = []
        self.waits: List[float] = []

    def add(self, selector: str, *elements: FakeElement, view: Optional[str] = None) -> 'FakePage':
        registry = self.views.setdefault(view or self.current, {})
        registry.setdefault(selector, []).extend(elements)
        return self

    def show(self, view: str) -> None:
        self.views.setdefault(view, {})
        self.current = view
        self.url = f"https://storefront.test/{view}"

    async def navigate(self, url: str, timeout: float = 30.0) -> None:
        self.visits.append(url)
        self.url = url

    async def find_all(self, descriptor: Descriptor, limit: Optional[int] = None) -> List[FakeElement]:
        if descriptor.selector in self.failing_selectors:
            raise RuntimeError(f"selector engine rejected {descriptor.selector}")
        return _select(self.views[self.current].get(descriptor.selector, []), descriptor, limit)

    async def fill(self, descriptor: Descriptor, text: str, timeout: float = 10.0) -> None:
        self.filled.append((descriptor.selector, text))

    async def press_key(self, descriptor: Descriptor, key: str, timeout: float = 10.0) -> None:
        self.pressed.append((descriptor.selector, key))

    async def wait(self, seconds: float) -> None:
        self.waits.append(seconds)


def listing(name: str, price: Optional[str], extra_text: str = '', buttons: Optional[Dict[str, FakeElement]] = None) -> FakeElement:
    """A results container with title and price fields, like Takealot's product-item article"""
    text = '\n'.join(part for part in (name, price, extra_text) if part)
    container = FakeElement(text=text)
    container.add('[data-ref="product-title"]', FakeElement(text=name))
    if price:
        container.add('[data-ref="price"]', FakeElement(text=price))
    for selector, button in (buttons or {}).items():
        container.add(selector, button)
    return container
