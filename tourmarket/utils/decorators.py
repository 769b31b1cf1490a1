from functools import wraps
import logging

from flask import current_app

from tourmarket.models import UserRole
from tourmarket.services.backend import (
    BackendAPIError, AuthenticationError, PermissionDeniedError, NotFoundError,
    ValidationError, RateLimitError, BackendUnavailableError, MalformedResponseError
)
from tourmarket.session import current_session
from tourmarket.utils.api_response import APIResponse

logger = logging.getLogger(__name__)


def login_required(f):
    """Decorator to require a signed-in account"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_session().is_authenticated:
            return APIResponse.unauthorized("Please login to continue")
        return f(*args, **kwargs)
    return decorated_function


def role_required(*roles):
    """Decorator to require specific account roles"""
    allowed = {UserRole(role) if not isinstance(role, UserRole) else role for role in roles}

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            context = current_session()
            if not context.is_authenticated:
                return APIResponse.unauthorized("Please login to continue")

            if context.role not in allowed:
                return APIResponse.forbidden("You don't have permission to access this resource")

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required():
    return role_required(UserRole.ADMIN)


def agency_required():
    return role_required(UserRole.AGENCY)


def handle_backend_error(f):
    """Decorator for consistent error handling of backend calls"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ValidationError as e:
            logger.warning(f"Validation error: {e.message}")
            return APIResponse.error(e.message, status_code=400)
        except AuthenticationError as e:
            logger.warning(f"Authentication error: {e.message}")
            context = current_session()
            if not context.is_authenticated:
                return APIResponse.unauthorized("Please login to continue")
            # backend no longer accepts the token; drop it
            context.sign_out()
            return APIResponse.unauthorized("Session expired. Please login again.")
        except PermissionDeniedError as e:
            return APIResponse.forbidden(e.message)
        except NotFoundError as e:
            return APIResponse.not_found(e.message)
        except RateLimitError:
            logger.warning("Rate limit exceeded")
            return APIResponse.error(
                'Too many requests. Please try again later.',
                status_code=429
            )
        except BackendUnavailableError as e:
            return APIResponse.service_unavailable(e.message)
        except MalformedResponseError as e:
            logger.error(f"Malformed backend response: {e.message}")
            return APIResponse.bad_gateway()
        except BackendAPIError as e:
            logger.error(f"Backend API error: {e.message}")
            return APIResponse.error(
                'Unable to process your request. Please try again.',
                errors={'detail': e.message} if current_app.debug else None,
                status_code=502
            )
        except Exception:
            logger.exception("Unexpected error in API endpoint")
            return APIResponse.error(
                'An unexpected error occurred. Please try again later.',
                status_code=500
            )
    return decorated_function
