from datetime import date

import pytest

from tourmarket.models import (
    ApprovalStatus, BookingRequest, DashboardStats, Difficulty, Review, Tour,
    TourListing, TourPackage, UserProfile, UserRole
)
from tourmarket.models.base import PayloadError
from tourmarket.models.tour import DEFAULT_TOUR_IMAGE, parse_tours
from tourmarket.models.user import PLACEHOLDER_IMAGE


class TestTourParsing:

    def test_tour_from_dict(self, approved_tours_payload):
        tour = Tour.from_dict(approved_tours_payload[0])

        assert tour.id == 'tour-1'
        assert tour.status == ApprovalStatus.APPROVED
        assert [pkg.id for pkg in tour.packages] == ['pkg-1', 'pkg-2']
        assert tour.packages[0].max_group_size == 12
        assert tour.packages[0].review_count == 5

    def test_parse_tours_accepts_wrapped_list(self, approved_tours_payload):
        assert len(parse_tours({'tours': approved_tours_payload})) == 2
        assert len(parse_tours(approved_tours_payload)) == 2

    def test_parse_tours_rejects_other_shapes(self):
        with pytest.raises(PayloadError):
            parse_tours({'data': []})

    def test_lenient_parse_skips_bad_packages_and_tours(self, approved_tours_payload):
        approved_tours_payload[0]['packages'].append({'_id': 'pkg-x', 'packageName': 'Free', 'price': -1})
        approved_tours_payload.append({'agencyName': 'Missing id'})

        with pytest.raises(PayloadError):
            parse_tours(approved_tours_payload)

        tours = parse_tours(approved_tours_payload, strict=False)
        assert [tour.id for tour in tours] == ['tour-1', 'tour-2']
        assert [pkg.id for pkg in tours[0].packages] == ['pkg-1', 'pkg-2']

    def test_tour_without_status_is_pending(self):
        tour = Tour.from_dict({'id': 't', 'agencyName': 'A'})
        assert tour.status == ApprovalStatus.PENDING
        assert tour.packages == []

    @pytest.mark.parametrize('field, value', [
        ('duration', 0),
        ('maxGroupSize', 'lots'),
        ('price', -5),
        ('price', 'NaN'),
        ('duration', 2.5),
    ])
    def test_package_rejects_bad_numbers(self, field, value):
        data = {
            'packageName': 'Broken',
            'duration': 3,
            'maxGroupSize': 5,
            'price': 100
        }
        data[field] = value
        with pytest.raises(PayloadError) as exc:
            TourPackage.from_dict(data)
        assert exc.value.field == field

    def test_package_numbers_sent_as_strings(self):
        pkg = TourPackage.from_dict({
            '_id': 'p', 'packageName': 'Str', 'duration': '3', 'maxGroupSize': '6', 'price': '49.5'
        })
        assert pkg.duration == 3
        assert pkg.price == 49.5


class TestTourListing:

    def test_from_package(self, approved_tours_payload):
        tour = Tour.from_dict(approved_tours_payload[0])
        listing = TourListing.from_package(tour, tour.packages[1])

        assert listing.title == 'Alpine Trek'
        assert listing.difficulty == Difficulty.MEDIUM
        assert listing.images == [DEFAULT_TOUR_IMAGE]
        assert listing.location.address == 'Chamonix, France'
        assert listing.location.coordinates == (0.0, 0.0)

        data = listing.to_dict()
        assert data['tourId'] == 'tour-1'
        assert data['packageId'] == 'pkg-2'
        assert data['maxGroupSize'] == 4
        assert data['location'] == {'address': 'Chamonix, France', 'coordinates': [0.0, 0.0]}


class TestUserModels:

    def test_profile_from_nested_login_payload(self):
        profile = UserProfile.from_dict({'user': {'_id': 'u1', 'name': 'Ann', 'email': 'ann@example.com'}})
        assert profile.id == 'u1'
        assert profile.role == UserRole.USER

    def test_agency_profile_name_falls_back(self):
        profile = UserProfile.from_dict(
            {'_id': 'a1', 'ownerName': 'Owner', 'agencyName': 'Trips Ltd', 'email': 'o@x.com'},
            role=UserRole.AGENCY
        )
        assert profile.name == 'Owner'
        assert profile.agency_name == 'Trips Ltd'
        assert profile.to_dict()['role'] == 'agency'

    def test_review_rating_range(self):
        with pytest.raises(PayloadError):
            Review.from_dict({'rating': 6, 'review': 'too good'})
        with pytest.raises(PayloadError):
            Review.from_dict({'rating': 0, 'review': 'too bad'})

    def test_dashboard_stats_fill_placeholder_package(self):
        stats = DashboardStats.from_dict({
            'upcomingTours': 2,
            'likedTours': [{'_id': 'l1', 'tourId': 't', 'packageId': 'p', 'package': None}],
            'reviews': [{'rating': 4, 'review': 'Nice', 'tourTitle': 'Rome'}]
        })

        assert stats.upcoming_tours == 2
        assert stats.completed_tours == 0
        assert stats.liked_tours[0].package['image'] == PLACEHOLDER_IMAGE
        assert stats.to_dict()['reviews'][0]['tourTitle'] == 'Rome'


class TestBookingRequest:

    def test_unpaid_payload(self):
        booking = BookingRequest('t1', 'p1', date(2030, 5, 1), 249.0)
        assert booking.to_payload() == {
            'tourId': 't1',
            'packageId': 'p1',
            'startDate': '2030-05-01',
            'price': 249.0,
            'paid': False
        }

    def test_paid_payload(self):
        payload = BookingRequest('t1', 'p1', date(2030, 5, 1), 249.0, payment_reference='PAY-1').to_payload()
        assert payload['paid'] is True
        assert payload['paymentReference'] == 'PAY-1'
