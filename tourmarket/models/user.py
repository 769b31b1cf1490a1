from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from tourmarket.models.base import (
    PayloadError, ensure_mapping, record_id, optional_str,
    as_int, as_float, as_enum
)
from tourmarket.models.enums import UserRole

PLACEHOLDER_IMAGE = '/placeholder-image.jpg'


def placeholder_package() -> Dict[str, Any]:
    """Stand-in for a liked or reviewed package that no longer exists"""
    return {
        '_id': '',
        'packageName': 'Unavailable',
        'image': PLACEHOLDER_IMAGE
    }


@dataclass
class UserProfile:
    id: str
    name: str
    email: str
    role: UserRole = UserRole.USER
    phone: Optional[str] = None
    agency_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], role: Optional[UserRole] = None) -> 'UserProfile':
        data = ensure_mapping(data, 'User')
        # login responses nest the profile under "user" on some routes
        if isinstance(data.get('user'), dict):
            data = data['user']
        if role is None:
            role = as_enum(UserRole, data['role'], 'role') if data.get('role') else UserRole.USER
        name = data.get('name') or data.get('ownerName') or data.get('agencyName') or ''
        return cls(
            id=record_id(data),
            name=str(name),
            email=optional_str(data, 'email'),
            role=role,
            phone=data.get('phone'),
            agency_name=data.get('agencyName')
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role.value,
            'phone': self.phone,
            'agencyName': self.agency_name
        }


@dataclass
class Review:
    tour_id: str
    package_id: str
    rating: int
    review: str
    user_name: str = ''
    created_at: Optional[str] = None
    id: str = ''
    tour_title: Optional[str] = None
    package: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Review':
        data = ensure_mapping(data, 'Review')
        rating = as_int(data, 'rating', minimum=1)
        if rating > 5:
            raise PayloadError("'rating' must be between 1 and 5", field='rating')
        return cls(
            id=record_id(data, required=False),
            tour_id=optional_str(data, 'tourId'),
            package_id=optional_str(data, 'packageId'),
            rating=rating,
            review=optional_str(data, 'review'),
            user_name=optional_str(data, 'userName'),
            created_at=data.get('createdAt'),
            tour_title=data.get('tourTitle'),
            package=data.get('package')
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            '_id': self.id,
            'tourId': self.tour_id,
            'packageId': self.package_id,
            'rating': self.rating,
            'review': self.review,
            'userName': self.user_name,
            'createdAt': self.created_at
        }
        if self.tour_title is not None:
            data['tourTitle'] = self.tour_title
        if self.package is not None:
            data['package'] = self.package
        return data


@dataclass
class LikedTour:
    id: str
    tour_id: str
    package_id: str
    created_at: Optional[str] = None
    tour_title: str = ''
    package: Dict[str, Any] = field(default_factory=placeholder_package)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LikedTour':
        data = ensure_mapping(data, 'Liked tour')
        package = data.get('package')
        return cls(
            id=record_id(data, required=False),
            tour_id=optional_str(data, 'tourId'),
            package_id=optional_str(data, 'packageId'),
            created_at=data.get('createdAt'),
            tour_title=optional_str(data, 'tourTitle'),
            package=package if isinstance(package, dict) and package else placeholder_package()
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_id': self.id,
            'tourId': self.tour_id,
            'packageId': self.package_id,
            'createdAt': self.created_at,
            'tourTitle': self.tour_title,
            'package': self.package
        }


@dataclass
class DashboardStats:
    """Traveler dashboard figures as returned by the stats endpoint"""
    upcoming_tours: int = 0
    completed_tours: int = 0
    saved_destinations: int = 0
    total_spent: float = 0.0
    liked_tours: List[LikedTour] = field(default_factory=list)
    reviews: List[Review] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DashboardStats':
        data = ensure_mapping(data, 'Dashboard stats')
        return cls(
            upcoming_tours=as_int(data, 'upcomingTours', default=0),
            completed_tours=as_int(data, 'completedTours', default=0),
            saved_destinations=as_int(data, 'savedDestinations', default=0),
            total_spent=as_float(data, 'totalSpent', default=0.0),
            liked_tours=[LikedTour.from_dict(item) for item in data.get('likedTours') or []],
            reviews=[Review.from_dict(item) for item in data.get('reviews') or []]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'upcomingTours': self.upcoming_tours,
            'completedTours': self.completed_tours,
            'savedDestinations': self.saved_destinations,
            'totalSpent': self.total_spent,
            'likedTours': [like.to_dict() for like in self.liked_tours],
            'reviews': [review.to_dict() for review in self.reviews]
        }


@dataclass
class BookingRequest:
    tour_id: str
    package_id: str
    start_date: date
    price: float
    payment_reference: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            'tourId': self.tour_id,
            'packageId': self.package_id,
            'startDate': self.start_date.isoformat(),
            'price': self.price,
            'paid': self.payment_reference is not None
        }
        if self.payment_reference:
            payload['paymentReference'] = self.payment_reference
        return payload
