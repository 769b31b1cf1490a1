import pytest

from tourmarket.models import UserProfile, UserRole
from tourmarket.session import SessionContext, TOKEN_KEY, USER_KEY


@pytest.fixture
def agency_user():
    return UserProfile(id='a1', name='Owner', email='owner@example.com',
                       role=UserRole.AGENCY, agency_name='Trips Ltd')


class TestSessionContext:

    def test_empty_session_is_anonymous(self):
        context = SessionContext({})

        assert context.token is None
        assert context.user is None
        assert context.role is None
        assert not context.is_authenticated
        assert context.to_dict() == {'isAuthenticated': False, 'role': None, 'user': None}

    def test_sign_in_stores_token_and_profile(self, agency_user):
        store = {}
        context = SessionContext(store)

        context.sign_in('jwt-token', agency_user)

        assert store[TOKEN_KEY] == 'jwt-token'
        assert store[USER_KEY]['role'] == 'agency'
        assert context.is_authenticated
        assert context.is_agency
        assert not context.is_admin
        assert context.user == agency_user

    def test_sign_in_requires_token(self, agency_user):
        with pytest.raises(ValueError):
            SessionContext({}).sign_in('', agency_user)

    def test_sign_out_clears_everything(self, agency_user):
        store = {'other': 'kept'}
        context = SessionContext(store)
        context.sign_in('jwt-token', agency_user)

        context.sign_out()

        assert store == {'other': 'kept'}
        assert not context.is_authenticated

    def test_token_without_profile_is_not_authenticated(self):
        assert not SessionContext({TOKEN_KEY: 'jwt'}).is_authenticated

    def test_unreadable_profile_signs_out(self):
        store = {TOKEN_KEY: 'jwt', USER_KEY: {'_id': 'u1', 'role': 'superuser'}}
        context = SessionContext(store)

        assert context.user is None
        assert store == {}

    def test_to_dict_for_admin(self):
        context = SessionContext({})
        context.sign_in('jwt', UserProfile(id='x', name='Admin', email='a@example.com', role=UserRole.ADMIN))

        data = context.to_dict()

        assert data['isAuthenticated'] is True
        assert data['role'] == 'admin'
        assert data['user']['_id'] == 'x'
