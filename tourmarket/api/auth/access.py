from flask import request, current_app

from tourmarket.api.auth import auth_bp
from tourmarket.api.auth.schemas import AuthSchemas
from tourmarket.services.backend import create_backend_service, AuthenticationError
from tourmarket.session import current_session
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import handle_backend_error


def _sign_in(login_method: str, welcome: str):
    """
    Shared login flow for travelers, agencies and the admin

    Validates the credentials, asks the backend for a token and stores the
    token and profile in the session context.
    """
    is_valid, errors, cleaned_data = AuthSchemas.validate_login(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)

    service = create_backend_service()
    try:
        token, user = getattr(service, login_method)(cleaned_data['email'], cleaned_data['password'])
    except AuthenticationError:
        return APIResponse.unauthorized('Invalid email or password')

    context = current_session()
    context.sign_in(token, user)
    current_app.logger.info(f"{user.role.value} {user.id} signed in")

    return APIResponse.success(data=context.to_dict(), message=welcome)


@auth_bp.route('/login', methods=['POST'])
@handle_backend_error
def login():
    """
    Login traveler with email and password

    Request Body:
        {
            "email": "john@example.com",
            "password": "SecurePass123"
        }

    Returns:
        200: Login successful, session established
        401: Invalid credentials
        422: Validation error
    """
    return _sign_in('login', 'Welcome back!')


@auth_bp.route('/admin/login', methods=['POST'])
@handle_backend_error
def admin_login():
    """Login administrator"""
    return _sign_in('admin_login', 'Welcome, administrator')


@auth_bp.route('/agency/login', methods=['POST'])
@handle_backend_error
def agency_login():
    """Login travel agency"""
    return _sign_in('agency_login', 'Welcome back!')


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Clear the session context"""
    current_session().sign_out()
    return APIResponse.success(message="Signed out successfully")


@auth_bp.route('/session', methods=['GET'])
def get_session():
    """Who is signed in, if anyone"""
    return APIResponse.success(data=current_session().to_dict())
