from flask import request, current_app

from tourmarket.api.agency import agency_bp
from tourmarket.api.agency.schemas import AgencySchemas
from tourmarket.services.backend import create_backend_service
from tourmarket.services.stats import summarize_package_statuses
from tourmarket.session import current_session
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import agency_required, handle_backend_error

# ===== AGENCY TOURS =====

@agency_bp.route('/tours', methods=['GET'])
@agency_required()
@handle_backend_error
def get_agency_tours():
    """
    Tours submitted by the signed-in agency

    Returns:
        - tours: every tour with its packages and approval state
        - stats: package counts (total, pending, approved, rejected)
    """
    context = current_session()
    service = create_backend_service(token=context.token)
    tours = service.get_agency_tours()

    return APIResponse.success({
        'agency': context.user.to_dict(),
        'tours': [tour.to_dict() for tour in tours],
        'stats': summarize_package_statuses(tours).to_dict()
    })


@agency_bp.route('/tours', methods=['POST'])
@agency_required()
@handle_backend_error
def submit_tour():
    """Submit one or more packages for admin approval"""
    is_valid, errors, packages = AgencySchemas.validate_tour_submission(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)

    context = current_session()
    service = create_backend_service(token=context.token)
    result = service.create_tour(packages)

    current_app.logger.info(f"Agency {context.user.id} submitted {len(packages)} package(s)")
    return APIResponse.success(
        data=result or None,
        message='Tour packages have been submitted for approval',
        status_code=201
    )


@agency_bp.route('/tours/<tour_id>', methods=['DELETE'])
@agency_required()
@handle_backend_error
def delete_tour(tour_id):
    """Delete one of the agency's tours"""
    context = current_session()
    service = create_backend_service(token=context.token)
    service.delete_tour(tour_id)

    current_app.logger.info(f"Agency {context.user.id} deleted tour {tour_id}")
    return APIResponse.success(message='Tour package has been deleted.')
