"""
Tour listing filters

Filtering is conjunctive: a listing is kept only when every populated
criterion matches. Empty criteria match everything, and values that do not
name a known bucket or difficulty are ignored rather than rejected.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from tourmarket.models.base import parse_enum
from tourmarket.models.enums import Difficulty, DurationBucket, GroupSizeBucket, PriceBucket
from tourmarket.models.tour import TourListing

# Range labels submitted by the listing page, mapped to buckets
DURATION_ALIASES = {
    '1-3': DurationBucket.SHORT,
    '4-7': DurationBucket.MEDIUM,
    '8+': DurationBucket.LONG,
}

GROUP_SIZE_ALIASES = {
    '1-5': GroupSizeBucket.SMALL,
    '6-10': GroupSizeBucket.MEDIUM,
    '11+': GroupSizeBucket.LARGE,
}

PRICE_ALIASES = {
    '0-100': PriceBucket.LOW,
    '101-300': PriceBucket.MID,
    '301+': PriceBucket.HIGH,
}

DURATION_RULES: Dict[DurationBucket, Callable[[float], bool]] = {
    DurationBucket.SHORT: lambda days: days <= 3,
    DurationBucket.MEDIUM: lambda days: 3 < days <= 7,
    DurationBucket.LONG: lambda days: days > 7,
}

GROUP_SIZE_RULES: Dict[GroupSizeBucket, Callable[[float], bool]] = {
    GroupSizeBucket.SMALL: lambda size: size <= 5,
    GroupSizeBucket.MEDIUM: lambda size: 5 < size <= 10,
    GroupSizeBucket.LARGE: lambda size: size > 10,
}

PRICE_RULES: Dict[PriceBucket, Callable[[float], bool]] = {
    PriceBucket.LOW: lambda price: price <= 100,
    PriceBucket.MID: lambda price: 100 < price <= 300,
    PriceBucket.HIGH: lambda price: price > 300,
}


def _bucket(value: Any, enum_cls, aliases: Dict[str, Any]):
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower()
    if not text:
        return None
    return aliases.get(text) or parse_enum(enum_cls, text)


@dataclass
class FilterCriteria:
    """
    What the traveler asked for on the listing page.

    Fields accept enum members, symbolic names or range labels; anything
    unrecognized is stored as None.
    """
    search: str = ''
    difficulty: Optional[Difficulty] = None
    duration: Optional[DurationBucket] = None
    group_size: Optional[GroupSizeBucket] = None
    price_range: Optional[PriceBucket] = None

    def __post_init__(self):
        self.search = str(self.search).strip() if self.search is not None else ''
        self.difficulty = parse_enum(Difficulty, self.difficulty)
        self.duration = _bucket(self.duration, DurationBucket, DURATION_ALIASES)
        self.group_size = _bucket(self.group_size, GroupSizeBucket, GROUP_SIZE_ALIASES)
        self.price_range = _bucket(self.price_range, PriceBucket, PRICE_ALIASES)

    @classmethod
    def from_args(cls, args: Optional[Mapping[str, Any]]) -> 'FilterCriteria':
        """
        Build criteria from request arguments.

        Accepts the query-string names (``groupSize``, ``priceRange``) as
        well as the attribute names. Unknown values become "no constraint".
        """
        args = args or {}

        def pick(*names):
            for name in names:
                if args.get(name) not in (None, ''):
                    return args.get(name)
            return None

        return cls(
            search=pick('search', 'q'),
            difficulty=pick('difficulty'),
            duration=pick('duration'),
            group_size=pick('groupSize', 'group_size'),
            price_range=pick('priceRange', 'price_range')
        )

    @property
    def is_empty(self) -> bool:
        return not (self.search or self.difficulty or self.duration
                    or self.group_size or self.price_range)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'search': self.search,
            'difficulty': self.difficulty.value if self.difficulty else None,
            'duration': self.duration.value if self.duration else None,
            'groupSize': self.group_size.value if self.group_size else None,
            'priceRange': self.price_range.value if self.price_range else None
        }

    def matches(self, listing: TourListing) -> bool:
        return (
            self._matches_search(listing)
            and (self.difficulty is None or listing.difficulty == self.difficulty)
            and (self.duration is None or DURATION_RULES[self.duration](listing.duration))
            and (self.group_size is None or GROUP_SIZE_RULES[self.group_size](listing.max_group_size))
            and (self.price_range is None or PRICE_RULES[self.price_range](listing.price))
        )

    def _matches_search(self, listing: TourListing) -> bool:
        if not self.search:
            return True
        needle = self.search.lower()
        return (
            needle in (listing.title or '').lower()
            or needle in (listing.description or '').lower()
            or needle in (listing.location.address or '').lower()
        )


def filter_tours(
    tours: Iterable[TourListing],
    criteria: Union[FilterCriteria, Mapping[str, Any], None] = None
) -> List[TourListing]:
    """
    Return the listings matching every populated criterion, in input order.

    Args:
        tours: Listings to filter; never modified
        criteria: FilterCriteria, a mapping of request-style arguments, or None

    Returns:
        New list of matching listings
    """
    if not isinstance(criteria, FilterCriteria):
        criteria = FilterCriteria.from_args(criteria)
    if criteria.is_empty:
        return list(tours)
    return [tour for tour in tours if criteria.matches(tour)]
