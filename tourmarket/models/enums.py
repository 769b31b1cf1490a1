from enum import Enum


class ApprovalStatus(Enum):
    """Review state of an agency submission"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    DIFFICULT = "difficult"


class UserRole(Enum):
    USER = "user"
    AGENCY = "agency"
    ADMIN = "admin"


class BookingStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class DurationBucket(Enum):
    """Trip length in days"""
    SHORT = "short"      # <= 3
    MEDIUM = "medium"    # 4-7
    LONG = "long"        # > 7


class GroupSizeBucket(Enum):
    """Maximum group size in people"""
    SMALL = "small"      # <= 5
    MEDIUM = "medium"    # 6-10
    LARGE = "large"      # > 10


class PriceBucket(Enum):
    """Package price in dollars"""
    LOW = "low"          # <= 100
    MID = "mid"          # 101-300
    HIGH = "high"        # > 300
