from flask import request, current_app

from tourmarket.api.tours import tours_bp
from tourmarket.api.tours.schemas import TourSchemas
from tourmarket.models import PackageKey
from tourmarket.services.backend import create_backend_service
from tourmarket.services.stats import PackageStatsStore
from tourmarket.session import current_session
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import handle_backend_error, login_required

PACKAGE_ROUTE = '/<tour_id>/packages/<package_id>'

# ==================== PACKAGE STATS ====================

@tours_bp.route(f'{PACKAGE_ROUTE}/stats', methods=['GET'])
@handle_backend_error
def get_package_stats(tour_id, package_id):
    """Display rating, review count and likes for one package"""
    context = current_session()
    service = create_backend_service(token=context.token)
    key = PackageKey(tour_id, package_id)

    store = PackageStatsStore()
    store.update_stats(key, service.get_package_stats(tour_id, package_id))
    store.update_likes(key, service.get_total_likes(tour_id, package_id))
    if context.is_authenticated:
        store.update_liked(key, service.get_like_status(tour_id, package_id))

    return APIResponse.success(
        data=store.snapshot(key),
        message="Package stats retrieved successfully"
    )

# ==================== LIKES ====================

@tours_bp.route(f'{PACKAGE_ROUTE}/like', methods=['POST'])
@login_required
@handle_backend_error
def toggle_like(tour_id, package_id):
    """Like or unlike a package for the signed-in traveler"""
    context = current_session()
    service = create_backend_service(token=context.token)
    key = PackageKey(tour_id, package_id)

    liked = service.toggle_like(tour_id, package_id, context.user.id)

    # report the server's total rather than adjusting a local counter
    store = PackageStatsStore()
    store.update_likes(key, service.get_total_likes(tour_id, package_id))
    store.update_liked(key, liked)

    return APIResponse.success(
        data={'liked': liked, 'likesCount': store.likes_for(key)},
        message="Package liked" if liked else "Package unliked"
    )

# ==================== REVIEWS ====================

@tours_bp.route(f'{PACKAGE_ROUTE}/reviews', methods=['GET'])
@handle_backend_error
def get_package_reviews(tour_id, package_id):
    """Reviews for one package, newest first"""
    service = create_backend_service(token=current_session().token)
    reviews = service.get_package_reviews(tour_id, package_id)
    reviews.sort(key=lambda review: review.created_at or '', reverse=True)

    return APIResponse.success(
        data={
            'reviews': [review.to_dict() for review in reviews],
            'total': len(reviews)
        },
        message=(
            f"Found {len(reviews)} review(s)" if reviews
            else "No reviews yet. Be the first to review!"
        )
    )


@tours_bp.route(f'{PACKAGE_ROUTE}/reviews', methods=['POST'])
@login_required
@handle_backend_error
def submit_review(tour_id, package_id):
    """
    Review a package

    Request Body:
        {
            "rating": 1-5,
            "review": "Share your experience..."
        }

    The backend decides whether this traveler has booked the package and
    answers 403 otherwise.
    """
    is_valid, errors, cleaned_data = TourSchemas.validate_review(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)

    context = current_session()
    service = create_backend_service(token=context.token)
    result = service.submit_review(
        tour_id,
        package_id,
        cleaned_data['rating'],
        cleaned_data['review'],
        context.user
    )

    current_app.logger.info(f"Review submitted for package {package_id} of tour {tour_id}")
    return APIResponse.success(
        data=result or None,
        message="Thank you for your feedback!",
        status_code=201
    )
