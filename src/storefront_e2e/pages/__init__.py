# Page modules, composed over one shared PageQuery
from .home_page import HomePage
from .search_results_page import SearchResultsPage
from .cart_page import CartPage
from .wishlist_page import WishlistPage

__all__ = ['HomePage', 'SearchResultsPage', 'CartPage', 'WishlistPage']
