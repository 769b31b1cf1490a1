from flask import request, current_app

from tourmarket.api.emergency import emergency_bp
from tourmarket.services.backend import create_backend_service
from tourmarket.session import current_session
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import handle_backend_error, login_required
from tourmarket.utils.validation import Validator

EMERGENCY_CONTACTS = [
    {'name': 'Police Emergency', 'phone': '100'},
    {'name': 'Medical Emergency', 'phone': '102'},
    {'name': 'Tourist Helpline', 'phone': '1363'},
]


@emergency_bp.route('/contacts', methods=['GET'])
def get_emergency_contacts():
    """Helpline numbers shown before notifying an agency"""
    return APIResponse.success(
        data={
            'contacts': EMERGENCY_CONTACTS,
            'notice': 'Contact emergency services immediately if needed, or notify your travel agency.'
        }
    )


@emergency_bp.route('/alert', methods=['POST'])
@login_required
@handle_backend_error
def send_emergency_alert():
    """
    Notify the agency running a traveler's tour

    Request Body:
        {
            "name": "Traveler name",
            "tourPackage": "Tour package or location"
        }
    """
    data = request.get_json(silent=True) or {}
    name = Validator.sanitize_input(data.get('name', ''), 120)
    tour_package = Validator.sanitize_input(data.get('tourPackage', ''), 200)

    if not name or not tour_package:
        errors = {}
        if not name:
            errors['name'] = 'Name is required'
        if not tour_package:
            errors['tourPackage'] = 'Tour package or location is required'
        return APIResponse.validation_error(errors, message='Please fill in all fields')

    service = create_backend_service(token=current_session().token)
    service.send_emergency_alert(name, tour_package)

    current_app.logger.warning(f"Emergency alert sent for '{tour_package}'")
    return APIResponse.success(message='Your travel agency has been notified')
