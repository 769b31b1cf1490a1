from flask import request, current_app

from tourmarket.api.auth import auth_bp
from tourmarket.api.auth.schemas import AuthSchemas
from tourmarket.services.backend import create_backend_service
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import handle_backend_error


@auth_bp.route('/agency/register', methods=['POST'])
@handle_backend_error
def register_agency():
    """
    Register a travel agency

    Request Body:
        {
            "agencyName": "Sunrise Travels",
            "ownerName": "Jane Doe",
            "email": "contact@sunrise.example",
            "phone": "+1 555 010 2030",
            "password": "SecurePass123",
            "confirmPassword": "SecurePass123"
        }

    Returns:
        201: Agency registered, may now login
        400: Rejected by the backend (e.g. email already registered)
        422: Validation error
    """
    is_valid, errors, cleaned_data = AuthSchemas.validate_agency_registration(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)

    service = create_backend_service()
    service.register_agency(cleaned_data)

    current_app.logger.info(f"Agency registered: {cleaned_data['agencyName']}")
    return APIResponse.success(
        message="Registration successful! You can now login to your agency account",
        status_code=201
    )
