# Models package
from .listing import ListingCandidate, RetryPolicy

__all__ = ['ListingCandidate', 'RetryPolicy']
