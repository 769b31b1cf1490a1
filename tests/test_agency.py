"""
Tests for the agency tour management endpoints

Run with: pytest tests/test_agency.py -v
"""
import pytest
from unittest.mock import patch, MagicMock

from tourmarket.models.tour import parse_tours
from tourmarket.services.backend import MalformedResponseError, NotFoundError


@pytest.fixture
def agency_client(client, login_as):
    return login_as('agency', user_id='g1', name='Sunrise Travels')


@pytest.fixture
def valid_package():
    return {
        'packageName': 'Rome in Three Days',
        'tourLocation': 'Rome, Italy',
        'packageDescription': 'Colosseum, Forum and Vatican.',
        'duration': 3,
        'maxGroupSize': 15,
        'price': 199,
        'image': 'data:image/png;base64,iVBORw0KGgo='
    }


class TestAgencyAccess:

    def test_requires_login(self, client):
        response = client.get('/api/agency/tours')

        assert response.status_code == 401

    def test_travelers_are_forbidden(self, client, login_as):
        login_as('user')

        response = client.get('/api/agency/tours')

        assert response.status_code == 403


class TestAgencyTours:

    def test_tours_with_status_summary(self, agency_client):
        service = MagicMock()
        service.get_agency_tours.return_value = parse_tours([
            {'_id': 't1', 'agencyName': 'Sunrise Travels', 'status': 'approved', 'packages': [
                {'_id': 'p1', 'packageName': 'A', 'duration': 1, 'maxGroupSize': 2, 'price': 10},
                {'_id': 'p2', 'packageName': 'B', 'duration': 1, 'maxGroupSize': 2, 'price': 10,
                 'status': 'rejected'},
            ]},
            {'_id': 't2', 'agencyName': 'Sunrise Travels', 'packages': [
                {'_id': 'p3', 'packageName': 'C', 'duration': 1, 'maxGroupSize': 2, 'price': 10},
            ]},
        ])

        with patch('tourmarket.api.agency.tours.create_backend_service', return_value=service):
            response = agency_client.get('/api/agency/tours')

        data = response.get_json()['data']
        assert response.status_code == 200
        assert data['stats'] == {'total': 3, 'pending': 1, 'approved': 1, 'rejected': 1}
        assert data['agency']['agencyName'] == 'Sunrise Travels'
        assert len(data['tours']) == 2

    def test_bad_backend_payload(self, agency_client):
        service = MagicMock()
        service.get_agency_tours.side_effect = MalformedResponseError("Invalid data format received")

        with patch('tourmarket.api.agency.tours.create_backend_service', return_value=service):
            response = agency_client.get('/api/agency/tours')

        assert response.status_code == 502

    def test_submit_tour(self, agency_client, valid_package):
        service = MagicMock()
        service.create_tour.return_value = {'_id': 'new-tour'}

        with patch('tourmarket.api.agency.tours.create_backend_service', return_value=service):
            response = agency_client.post('/api/agency/tours', json={'packages': [valid_package]})

        assert response.status_code == 201
        assert response.get_json()['message'] == 'Tour packages have been submitted for approval'
        packages = service.create_tour.call_args[0][0]
        assert packages[0].package_name == 'Rome in Three Days'
        assert packages[0].max_group_size == 15

    def test_submit_requires_packages(self, agency_client):
        response = agency_client.post('/api/agency/tours', json={'packages': []})

        assert response.status_code == 422
        assert response.get_json()['errors']['packages'] == 'At least one tour package is required'

    def test_submit_reports_errors_per_package(self, agency_client, valid_package):
        broken = dict(valid_package, duration=0, price='free', image='ftp://nope')

        response = agency_client.post('/api/agency/tours', json={'packages': [valid_package, broken]})

        errors = response.get_json()['errors']
        assert response.status_code == 422
        assert errors['packages[1].duration'] == 'Duration must be at least 1 day'
        assert errors['packages[1].price'] == 'Invalid price'
        assert 'packages[1].image' in errors
        assert not any(key.startswith('packages[0]') for key in errors)

    def test_delete_tour(self, agency_client):
        service = MagicMock()

        with patch('tourmarket.api.agency.tours.create_backend_service', return_value=service):
            response = agency_client.delete('/api/agency/tours/t1')

        assert response.status_code == 200
        assert response.get_json()['message'] == 'Tour package has been deleted.'
        service.delete_tour.assert_called_once_with('t1')

    def test_delete_missing_tour(self, agency_client):
        service = MagicMock()
        service.delete_tour.side_effect = NotFoundError("Tour not found", status_code=404)

        with patch('tourmarket.api.agency.tours.create_backend_service', return_value=service):
            response = agency_client.delete('/api/agency/tours/ghost')

        assert response.status_code == 404
