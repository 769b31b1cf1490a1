"""
Display figures for tour packages

Ratings and like counts arrive per package from separate backend calls that
may fail or come back in any order. The helpers here turn whatever has
arrived into numbers that are always safe to show: finite and never negative.
"""
import math
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from tourmarket.models.enums import ApprovalStatus
from tourmarket.models.stats import AgencyPackageSummary, PackageKey, PackageStats
from tourmarket.models.tour import Tour, TourPackage

PackageLike = Union[TourPackage, Mapping[str, Any]]


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _package_figures(pkg: Optional[PackageLike]):
    if pkg is None:
        return None, None
    if isinstance(pkg, Mapping):
        return pkg.get('rating'), pkg.get('reviewCount', pkg.get('review_count'))
    return pkg.rating, pkg.review_count


def _stats_average(stats: Union[PackageStats, Mapping[str, Any], None]) -> Optional[float]:
    if stats is None:
        return None
    if isinstance(stats, Mapping):
        return _to_number(stats.get('averageRating', stats.get('average_rating')))
    return _to_number(stats.average_rating)


def compute_display_rating(
    stats: Union[PackageStats, Mapping[str, Any], None],
    pkg: Optional[PackageLike]
) -> float:
    """
    Rating to show for a package.

    The server-computed average wins when it is a finite number. Otherwise the
    package's own rating total is divided by its review count, and a package
    without reviews rates 0.
    """
    average = _stats_average(stats)
    if average is not None:
        return max(average, 0.0)

    rating, review_count = _package_figures(pkg)
    rating = _to_number(rating)
    review_count = _to_number(review_count)
    if rating is None or review_count is None or review_count <= 0:
        return 0.0
    return max(rating / review_count, 0.0)


def compute_display_like_count(server_total: Any) -> int:
    """
    Like count to show.

    Inconsistent negative or non-numeric totals read as 0. Likes are whole
    counts, so a fractional total is truncated toward zero.
    """
    total = _to_number(server_total)
    if total is None or total < 0:
        return 0
    return int(total)


def summarize_package_statuses(tours: Iterable[Tour]) -> AgencyPackageSummary:
    """
    Count an agency's packages by approval state.

    Packages without a status of their own take the status of their tour.
    """
    summary = AgencyPackageSummary()
    for tour in tours:
        for pkg in tour.packages:
            status = pkg.status or tour.status
            summary.total += 1
            if status == ApprovalStatus.PENDING:
                summary.pending += 1
            elif status == ApprovalStatus.APPROVED:
                summary.approved += 1
            elif status == ApprovalStatus.REJECTED:
                summary.rejected += 1
    return summary


class PackageStatsStore:
    """
    Per-view map of package stats and like totals.

    Each fetch writes only its own key; a later write for the same key
    replaces the earlier one. Reads never fail: a missing key falls back to
    the package's own fields.
    """

    def __init__(self):
        self._stats: Dict[PackageKey, PackageStats] = {}
        self._likes: Dict[PackageKey, int] = {}
        self._liked: Dict[PackageKey, bool] = {}

    def __len__(self):
        return len(self._stats)

    def __contains__(self, key):
        return key in self._stats

    def update_stats(self, key: PackageKey, stats: PackageStats) -> None:
        self._stats[key] = stats

    def update_likes(self, key: PackageKey, total: Any) -> None:
        self._likes[key] = compute_display_like_count(total)

    def update_liked(self, key: PackageKey, liked: bool) -> None:
        self._liked[key] = bool(liked)

    def get(self, key: PackageKey) -> Optional[PackageStats]:
        return self._stats.get(key)

    def rating_for(self, key: PackageKey, pkg: Optional[PackageLike]) -> float:
        return compute_display_rating(self._stats.get(key), pkg)

    def review_count_for(self, key: PackageKey, pkg: Optional[PackageLike]) -> int:
        stats = self._stats.get(key)
        if stats is not None:
            return max(stats.review_count, 0)
        _, review_count = _package_figures(pkg)
        review_count = _to_number(review_count)
        return int(review_count) if review_count and review_count > 0 else 0

    def likes_for(self, key: PackageKey) -> int:
        return self._likes.get(key, 0)

    def is_liked(self, key: PackageKey) -> bool:
        return self._liked.get(key, False)

    def snapshot(self, key: PackageKey, pkg: Optional[PackageLike] = None) -> Dict[str, Any]:
        """Display figures for one package"""
        return {
            'tourId': key.tour_id,
            'packageId': key.package_id,
            'rating': self.rating_for(key, pkg),
            'reviewCount': self.review_count_for(key, pkg),
            'likesCount': self.likes_for(key),
            'isLiked': self.is_liked(key)
        }
