from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional

from tourmarket.models.base import ensure_mapping, as_int, optional_float


class PackageKey(NamedTuple):
    """Composite key for per-package stats"""
    tour_id: str
    package_id: str


@dataclass
class PackageStats:
    """Server-aggregated review figures for one package"""
    average_rating: Optional[float] = None
    review_count: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PackageStats':
        data = ensure_mapping(data, 'Package stats')
        return cls(
            average_rating=optional_float(data, 'averageRating'),
            review_count=as_int(data, 'reviewCount', default=0)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'averageRating': self.average_rating,
            'reviewCount': self.review_count
        }


@dataclass
class AgencyPackageSummary:
    """Package counts per approval state for an agency dashboard"""
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'total': self.total,
            'pending': self.pending,
            'approved': self.approved,
            'rejected': self.rejected
        }
