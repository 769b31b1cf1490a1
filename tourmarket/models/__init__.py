from tourmarket.models.base import PayloadError
from tourmarket.models.enums import (
    ApprovalStatus, Difficulty, UserRole, BookingStatus,
    DurationBucket, GroupSizeBucket, PriceBucket
)
from tourmarket.models.tour import TourPackage, Tour, TourListing, Location, parse_tours
from tourmarket.models.stats import PackageKey, PackageStats, AgencyPackageSummary
from tourmarket.models.user import (
    UserProfile, Review, LikedTour, DashboardStats, BookingRequest
)
