from flask import current_app

from tourmarket.api.client import client_bp
from tourmarket.services.backend import create_backend_service
from tourmarket.session import current_session
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import handle_backend_error, login_required

# ==================== DASHBOARD OVERVIEW ====================

@client_bp.route('', methods=['GET'])
@login_required
@handle_backend_error
def get_dashboard():
    """
    Traveler dashboard

    Returns:
        - Profile of the signed-in traveler
        - Upcoming / completed tours, saved destinations, total spent
        - Liked tours (missing packages replaced by a placeholder)
        - Reviews written
    """
    context = current_session()
    user = context.user

    service = create_backend_service(token=context.token)
    stats = service.get_user_stats(user.id)

    current_app.logger.debug(
        f"Dashboard for {user.id}: {len(stats.liked_tours)} like(s), {len(stats.reviews)} review(s)"
    )

    return APIResponse.success(
        data={
            'user': user.to_dict(),
            'stats': stats.to_dict()
        },
        message="Dashboard data retrieved successfully"
    )
