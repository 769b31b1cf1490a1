from flask import request, current_app

from tourmarket.api.tours import tours_bp
from tourmarket.models import PackageKey, TourListing
from tourmarket.services.backend import create_backend_service, BackendAPIError
from tourmarket.services.catalog import showcase_listings
from tourmarket.services.filters import FilterCriteria, filter_tours
from tourmarket.services.stats import PackageStatsStore, compute_display_rating
from tourmarket.session import current_session
from tourmarket.utils.api_response import APIResponse
from tourmarket.utils.decorators import handle_backend_error

FETCH_FAILED_NOTICE = (
    'An error occurred while fetching the available tours. '
    'Please try again later.'
)

# ==================== LISTING HELPERS ====================

def _load_package_figures(service, store, key, with_like_status):
    """
    Fill one package's slot in the stats store.

    A failed call leaves that slot empty so the package falls back to its
    own rating fields; other packages are unaffected.
    """
    try:
        store.update_stats(key, service.get_package_stats(*key))
    except BackendAPIError as e:
        current_app.logger.warning(f"Package stats unavailable for {key}: {e.message}")

    try:
        store.update_likes(key, service.get_total_likes(*key))
    except BackendAPIError as e:
        current_app.logger.warning(f"Like total unavailable for {key}: {e.message}")

    if with_like_status:
        try:
            store.update_liked(key, service.get_like_status(*key))
        except BackendAPIError as e:
            current_app.logger.warning(f"Like status unavailable for {key}: {e.message}")


def load_listings():
    """
    Approved packages as listings with display figures merged in.

    Returns:
        (listings, notice) where notice is a message for the traveler when
        the catalogue could not be fetched
    """
    context = current_session()
    service = create_backend_service(token=context.token)
    listings = showcase_listings() if current_app.config.get('SHOWCASE_TOURS_ENABLED') else []

    try:
        tours = service.get_approved_tours()
    except BackendAPIError as e:
        current_app.logger.error(f"Error fetching approved tours: {e.message}")
        return listings, FETCH_FAILED_NOTICE

    store = PackageStatsStore()
    for tour in tours:
        for pkg in tour.packages:
            listing = TourListing.from_package(tour, pkg)
            if pkg.id:
                key = PackageKey(tour.id, pkg.id)
                _load_package_figures(service, store, key, context.is_authenticated)
                listing.rating = store.rating_for(key, pkg)
                listing.reviews = store.review_count_for(key, pkg)
                listing.likes_count = store.likes_for(key)
                listing.is_liked = store.is_liked(key)
            else:
                # no id to fetch stats for; use the package's own figures
                listing.rating = compute_display_rating(None, pkg)
            listings.append(listing)

    return listings, None

# ==================== LISTING ENDPOINTS ====================

@tours_bp.route('', methods=['GET'])
@handle_backend_error
def list_tours():
    """
    Browse tours

    Query Parameters:
        search: Text matched against title, description and location
        difficulty: easy | medium | difficult
        duration: 1-3 | 4-7 | 8+ (or short | medium | long)
        groupSize: 1-5 | 6-10 | 11+ (or small | medium | large)
        priceRange: 0-100 | 101-300 | 301+ (or low | mid | high)
    """
    criteria = FilterCriteria.from_args(request.args)
    listings, notice = load_listings()
    matches = filter_tours(listings, criteria)

    data = {
        'items': [listing.to_dict() for listing in matches],
        'total': len(matches),
        'available': len(listings),
        'filters': criteria.to_dict()
    }
    if notice:
        data['notice'] = notice

    message = (
        f"Found {len(matches)} tour(s)" if matches
        else "No tours found matching your criteria"
    )
    return APIResponse.success(data=data, message=message)


@tours_bp.route('/locations', methods=['GET'])
@handle_backend_error
def list_tour_locations():
    """Map markers for the tours matching the current filters"""
    criteria = FilterCriteria.from_args(request.args)
    listings, notice = load_listings()

    locations = [
        {
            'coordinates': list(listing.location.coordinates),
            'name': listing.title,
            'description': listing.location.address,
            'tourId': listing.tour_id,
            'packageId': listing.package_id
        }
        for listing in filter_tours(listings, criteria)
    ]

    data = {'locations': locations}
    if notice:
        data['notice'] = notice
    return APIResponse.success(data=data, message=f"Found {len(locations)} location(s)")
