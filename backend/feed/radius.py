"""
Radius filter for ranked feeds.
"""

from enum import Enum
from typing import Iterable, List, Union

from .assembler import FeedItem


class RadiusFilter(Enum):
    """Distance limits the user can pick, in km."""
    KM_10 = 10
    KM_25 = 25
    KM_50 = 50
    KM_100 = 100
    UNBOUNDED = "unbounded"

    @classmethod
    def parse(cls, value: Union["RadiusFilter", int, str]) -> "RadiusFilter":
        """
        Radius from a config or UI value: 10, "25", "unbounded" or "all".

        Raises:
            ValueError: If the value is not one of the allowed radii
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if text in ("unbounded", "all"):
                return cls.UNBOUNDED
            if text.isdigit():
                value = int(text)
        for radius in cls:
            if radius.value == value:
                return radius
        allowed = ", ".join(str(r.value) for r in cls)
        raise ValueError(f"Invalid radius: {value!r}. Allowed values: {allowed}")


def filter_by_radius(items: Iterable[FeedItem], radius: RadiusFilter) -> List[FeedItem]:
    """
    Keep items within the radius. Items with unknown distance are always kept.
    Order is preserved; nothing is re-ranked.
    """
    if radius is RadiusFilter.UNBOUNDED:
        return list(items)
    return [
        item for item in items
        if item.calculated_distance is None or item.calculated_distance <= radius.value
    ]
