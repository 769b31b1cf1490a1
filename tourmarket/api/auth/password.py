from flask import request, current_app

from tourmarket.api.auth import auth_bp
from tourmarket.api.auth.schemas import AuthSchemas
from tourmarket.services.backend import create_backend_service, NotFoundError, ValidationError
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import handle_backend_error
from tourmarket.utils.validation import Validator

# ==================== AGENCY PASSWORD RESET ====================

@auth_bp.route('/agency/forgot-password/verify', methods=['POST'])
@handle_backend_error
def verify_agency_email():
    """
    First step of the agency password reset: confirm the email is registered

    Request Body:
        {"email": "contact@sunrise.example"}
    """
    data = request.get_json(silent=True) or {}
    email = str(data.get('email') or '').strip().lower()
    if not email:
        return APIResponse.validation_error({'email': 'Please enter your agency email address'})
    if not Validator.validate_email(email):
        return APIResponse.validation_error({'email': 'Invalid email format'})

    service = create_backend_service()
    try:
        service.verify_agency_email(email)
    except (NotFoundError, ValidationError):
        return APIResponse.not_found("Agency email not found")

    return APIResponse.success(
        data={'email': email},
        message="Email verified. Please choose a new password"
    )


@auth_bp.route('/agency/forgot-password/reset', methods=['POST'])
@handle_backend_error
def reset_agency_password():
    """
    Second step of the agency password reset

    Request Body:
        {
            "email": "contact@sunrise.example",
            "password": "NewPass123",
            "confirmPassword": "NewPass123"
        }
    """
    is_valid, errors, cleaned_data = AuthSchemas.validate_password_reset(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)

    service = create_backend_service()
    service.update_agency_password(cleaned_data['email'], cleaned_data['password'])

    current_app.logger.info("Agency password updated")
    return APIResponse.success(message="Your agency password has been successfully changed")
