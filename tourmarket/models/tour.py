import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from tourmarket.models.base import (
    PayloadError, ensure_mapping, record_id, require_str, optional_str,
    as_int, as_float, optional_float, optional_int, as_enum
)
from tourmarket.models.enums import ApprovalStatus, Difficulty

logger = logging.getLogger(__name__)

DEFAULT_TOUR_IMAGE = 'https://images.unsplash.com/photo-1500835556837-99ac94a94552'


def _coordinates(value: Any) -> Optional[Tuple[float, float]]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise PayloadError("'coordinates' must be a [lng, lat] pair", field='coordinates')
    try:
        return float(value[0]), float(value[1])
    except (TypeError, ValueError):
        raise PayloadError("'coordinates' must be numeric", field='coordinates')


@dataclass
class TourPackage:
    """A bookable unit within an agency's tour"""
    id: str
    package_name: str
    package_description: str
    tour_location: str
    duration: int
    max_group_size: int
    price: float
    image: str = ''
    status: Optional[ApprovalStatus] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    coordinates: Optional[Tuple[float, float]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TourPackage':
        data = ensure_mapping(data, 'Tour package')
        status = data.get('status')
        return cls(
            id=record_id(data, required=False),
            package_name=require_str(data, 'packageName'),
            package_description=optional_str(data, 'packageDescription'),
            tour_location=optional_str(data, 'tourLocation'),
            duration=as_int(data, 'duration', minimum=1),
            max_group_size=as_int(data, 'maxGroupSize', minimum=1),
            price=as_float(data, 'price', minimum=0),
            image=optional_str(data, 'image'),
            status=as_enum(ApprovalStatus, status, 'status') if status else None,
            rating=optional_float(data, 'rating'),
            review_count=optional_int(data, 'reviewCount'),
            coordinates=_coordinates(data.get('coordinates'))
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            '_id': self.id,
            'packageName': self.package_name,
            'packageDescription': self.package_description,
            'tourLocation': self.tour_location,
            'duration': self.duration,
            'maxGroupSize': self.max_group_size,
            'price': self.price,
            'image': self.image,
            'status': self.status.value if self.status else None,
            'rating': self.rating,
            'reviewCount': self.review_count
        }
        if self.coordinates:
            data['coordinates'] = list(self.coordinates)
        return data


@dataclass
class Tour:
    """An agency listing holding one or more packages"""
    id: str
    agency_name: str
    packages: List[TourPackage] = field(default_factory=list)
    status: ApprovalStatus = ApprovalStatus.PENDING
    agency_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], strict: bool = True) -> 'Tour':
        """
        Args:
            data: Tour JSON from the backend
            strict: When False, malformed packages are logged and left out
                instead of failing the whole tour
        """
        data = ensure_mapping(data, 'Tour')
        packages = data.get('packages') or []
        if not isinstance(packages, list):
            raise PayloadError("'packages' must be a list", field='packages')
        status = data.get('status')
        tour_id = record_id(data)

        parsed = []
        for pkg in packages:
            try:
                parsed.append(TourPackage.from_dict(pkg))
            except PayloadError as e:
                if strict:
                    raise
                logger.warning(f"Skipping malformed package in tour {tour_id}: {e.message}")

        return cls(
            id=tour_id,
            agency_name=optional_str(data, 'agencyName'),
            packages=parsed,
            status=as_enum(ApprovalStatus, status, 'status') if status else ApprovalStatus.PENDING,
            agency_id=data.get('agencyId'),
            created_at=data.get('createdAt')
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_id': self.id,
            'agencyId': self.agency_id,
            'agencyName': self.agency_name,
            'status': self.status.value,
            'createdAt': self.created_at,
            'packages': [pkg.to_dict() for pkg in self.packages]
        }


@dataclass
class Location:
    address: str
    coordinates: Tuple[float, float] = (0.0, 0.0)


@dataclass
class TourListing:
    """
    One (tour, package) pair flattened for display and filtering.

    Agency packages carry no difficulty grade, so listings built from them
    are graded ``medium``.
    """
    title: str
    description: str
    location: Location
    duration: int
    max_group_size: int
    price: float
    difficulty: Difficulty = Difficulty.MEDIUM
    images: List[str] = field(default_factory=list)
    rating: float = 0.0
    reviews: int = 0
    agency_name: Optional[str] = None
    tour_id: Optional[str] = None
    package_id: Optional[str] = None
    likes_count: int = 0
    is_liked: bool = False

    @classmethod
    def from_package(cls, tour: Tour, pkg: TourPackage) -> 'TourListing':
        return cls(
            title=pkg.package_name,
            description=pkg.package_description,
            location=Location(pkg.tour_location, pkg.coordinates or (0.0, 0.0)),
            duration=pkg.duration,
            max_group_size=pkg.max_group_size,
            price=pkg.price,
            images=[pkg.image or DEFAULT_TOUR_IMAGE],
            reviews=pkg.review_count or 0,
            agency_name=tour.agency_name,
            tour_id=tour.id,
            package_id=pkg.id
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tourId': self.tour_id,
            'packageId': self.package_id,
            'title': self.title,
            'description': self.description,
            'price': self.price,
            'duration': self.duration,
            'maxGroupSize': self.max_group_size,
            'difficulty': self.difficulty.value,
            'images': self.images,
            'location': {
                'address': self.location.address,
                'coordinates': list(self.location.coordinates)
            },
            'rating': self.rating,
            'reviews': self.reviews,
            'agencyName': self.agency_name,
            'likesCount': self.likes_count,
            'isLiked': self.is_liked
        }


def parse_tours(payload: Any, strict: bool = True) -> List[Tour]:
    """
    Accept either a bare list of tours or ``{"tours": [...]}``

    With ``strict=False`` a malformed tour or package is logged and skipped
    so the rest of the list survives.
    """
    if isinstance(payload, dict) and isinstance(payload.get('tours'), list):
        payload = payload['tours']
    if not isinstance(payload, list):
        raise PayloadError("Expected a list of tours")
    if strict:
        return [Tour.from_dict(item) for item in payload]

    tours = []
    for item in payload:
        try:
            tours.append(Tour.from_dict(item, strict=False))
        except PayloadError as e:
            logger.warning(f"Skipping malformed tour: {e.message}")
    return tours
