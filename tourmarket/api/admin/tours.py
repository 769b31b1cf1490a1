from flask import request, current_app

from tourmarket.api.admin import admin_bp
from tourmarket.models import ApprovalStatus
from tourmarket.models.base import parse_enum
from tourmarket.services.backend import create_backend_service
from tourmarket.session import current_session
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import admin_required, handle_backend_error

# Statuses an admin may set; "pending" is the state a submission starts in
REVIEW_DECISIONS = (ApprovalStatus.APPROVED, ApprovalStatus.REJECTED)

# ===== TOUR APPROVAL =====

@admin_bp.route('/tours/pending', methods=['GET'])
@admin_required()
@handle_backend_error
def get_pending_tours():
    """Tours waiting for an approval decision, oldest first"""
    service = create_backend_service(token=current_session().token)
    tours = service.get_pending_tours()
    tours.sort(key=lambda tour: tour.created_at or '')

    return APIResponse.success(
        data={
            'tours': [tour.to_dict() for tour in tours],
            'total': len(tours)
        },
        message=(
            f"Found {len(tours)} pending tour(s)" if tours
            else "No pending tour packages to review."
        )
    )


@admin_bp.route('/tours/<tour_id>/status', methods=['PATCH'])
@admin_required()
@handle_backend_error
def update_tour_status(tour_id):
    """
    Approve or reject a tour

    Request Body:
        {"status": "approved" | "rejected"}
    """
    data = request.get_json(silent=True) or {}
    status = parse_enum(ApprovalStatus, data.get('status'))
    if status not in REVIEW_DECISIONS:
        return APIResponse.validation_error({
            'status': f'Status must be one of: {", ".join(s.value for s in REVIEW_DECISIONS)}'
        })

    context = current_session()
    service = create_backend_service(token=context.token)
    service.update_tour_status(tour_id, status)

    current_app.logger.info(f"Admin {context.user.id} set tour {tour_id} to {status.value}")
    return APIResponse.success(
        data={'tourId': tour_id, 'status': status.value},
        message=f"The tour package has been {status.value}."
    )
