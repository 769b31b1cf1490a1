from flask import request, current_app

from tourmarket.api.tours import tours_bp
from tourmarket.api.tours.schemas import TourSchemas
from tourmarket.models import BookingRequest, BookingStatus
from tourmarket.models.base import parse_enum
from tourmarket.services.backend import create_backend_service
from tourmarket.session import current_session
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import handle_backend_error, login_required

# ==================== BOOKINGS ====================

@tours_bp.route('/<tour_id>/packages/<package_id>/bookings', methods=['POST'])
@login_required
@handle_backend_error
def create_booking(tour_id, package_id):
    """
    Book a package

    Request Body:
        {
            "startDate": "2026-05-01",
            "price": 249,
            "paymentReference": "PAYPAL-ORDER-ID"  // optional
        }

    Payment is captured by the payment provider before this call; only the
    reference is forwarded.
    """
    is_valid, errors, cleaned_data = TourSchemas.validate_booking(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)

    booking = BookingRequest(
        tour_id=tour_id,
        package_id=package_id,
        start_date=cleaned_data['start_date'],
        price=cleaned_data['price'],
        payment_reference=cleaned_data['payment_reference']
    )

    service = create_backend_service(token=current_session().token)
    result = service.create_booking(booking)
    if not isinstance(result, dict):
        result = {}

    status = parse_enum(BookingStatus, result.get('status')) or BookingStatus.PENDING
    current_app.logger.info(f"Booking created for package {package_id}: {status.value}")

    return APIResponse.success(
        data={
            'booking': result,
            'status': status.value
        },
        message="Booking created successfully",
        status_code=201
    )
