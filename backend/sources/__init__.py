"""
Candidate sources for the feed: mock data file or REST backend.
"""

from .base import BaseSource
from .runner import FetchResult, SourceRunner

__all__ = [
    'BaseSource',
    'FetchResult',
    'SourceRunner',
]
