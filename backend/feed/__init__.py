"""
Feed package: ranking, radius filtering and dismissal state for the home feed.
"""

from .assembler import FeedAssembler, FeedItem
from .dismissals import DismissalStore
from .radius import RadiusFilter, filter_by_radius
from .session import FeedSession, FeedSnapshot, create_session

__all__ = [
    'FeedAssembler',
    'FeedItem',
    'DismissalStore',
    'RadiusFilter',
    'filter_by_radius',
    'FeedSession',
    'FeedSnapshot',
    'create_session',
]
