import pytest
from tourmarket import create_app
from config import Config


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    BACKEND_API_URL = 'http://backend.test/api'
    BACKEND_MAX_RETRIES = 0
    SHOWCASE_TOURS_ENABLED = False


@pytest.fixture
def app():
    app = create_app(TestConfig)

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def login_as(client):
    """Put a signed-in account of the given role into the client's session"""
    def _login_as(role='user', user_id='user-1', name='Test User'):
        with client.session_transaction() as sess:
            sess['token'] = f'token-{user_id}'
            sess['user'] = {
                '_id': user_id,
                'name': name,
                'email': f'{user_id}@example.com',
                'role': role,
                'phone': None,
                'agencyName': name if role == 'agency' else None
            }
        return client
    return _login_as


@pytest.fixture
def approved_tours_payload():
    """Backend payload for GET /tours/approved"""
    return [
        {
            '_id': 'tour-1',
            'agencyName': 'Sunrise Travels',
            'status': 'approved',
            'packages': [
                {
                    '_id': 'pkg-1',
                    'packageName': 'Paris Discovery',
                    'packageDescription': 'Eiffel Tower, Louvre and Montmartre.',
                    'tourLocation': 'Paris, France',
                    'duration': 4,
                    'maxGroupSize': 12,
                    'price': 249,
                    'image': 'https://img.example/paris.jpg',
                    'rating': 20,
                    'reviewCount': 5
                },
                {
                    '_id': 'pkg-2',
                    'packageName': 'Alpine Trek',
                    'packageDescription': 'Two weeks across the Alps.',
                    'tourLocation': 'Chamonix, France',
                    'duration': 14,
                    'maxGroupSize': 4,
                    'price': 1200,
                    'image': ''
                }
            ]
        },
        {
            '_id': 'tour-2',
            'agencyName': 'Budget Breaks',
            'status': 'approved',
            'packages': [
                {
                    '_id': 'pkg-3',
                    'packageName': 'Lisbon Weekend',
                    'packageDescription': 'Trams, pastries and fado.',
                    'tourLocation': 'Lisbon, Portugal',
                    'duration': 2,
                    'maxGroupSize': 8,
                    'price': 90,
                    'image': 'https://img.example/lisbon.jpg'
                }
            ]
        }
    ]
