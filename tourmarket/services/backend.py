"""
Tour Marketplace Backend Service

This module provides the interface to the marketplace REST backend that owns
tours, packages, reviews, likes, bookings and accounts. The front end never
stores marketplace data itself; every read and write goes through here.

Key Features:
- Shared requests session with retry on idempotent calls
- Bearer token taken from the caller's session context
- Typed exceptions per failure class (auth, permission, validation, ...)
- Responses validated into model dataclasses at the boundary
"""

import os
import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from flask import current_app, has_app_context

from tourmarket.models import (
    ApprovalStatus, PayloadError, Tour, TourPackage, PackageStats, Review,
    UserProfile, UserRole, DashboardStats, BookingRequest, parse_tours
)

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "http://localhost:5000/api"


@dataclass
class BackendConfig:
    """Configuration for the marketplace backend client"""
    base_url: str = DEFAULT_BACKEND_URL
    token: Optional[str] = None
    timeout: int = 15
    max_retries: int = 3


class BackendAPIError(Exception):
    """Base exception for marketplace backend errors"""
    def __init__(self, message: str, status_code: Optional[int] = None,
                 response: Optional[Dict] = None):
        self.message = message
        self.status_code = status_code
        self.response = response
        super().__init__(self.message)


class AuthenticationError(BackendAPIError):
    """Raised when the backend rejects or lacks credentials"""
    pass


class PermissionDeniedError(BackendAPIError):
    """Raised when the signed-in account may not perform the action"""
    pass


class NotFoundError(BackendAPIError):
    """Raised when the requested record does not exist"""
    pass


class ValidationError(BackendAPIError):
    """Raised when the backend rejects the request body"""
    pass


class RateLimitError(BackendAPIError):
    """Raised when rate limit is exceeded"""
    pass


class BackendUnavailableError(BackendAPIError):
    """Raised when the backend cannot be reached"""
    pass


class MalformedResponseError(BackendAPIError):
    """Raised when a backend response does not have the expected shape"""
    pass


class TourBackendService:
    """
    Client for the marketplace backend

    This service handles:
    - Approved tour catalogue, package stats and like totals
    - Likes, reviews and bookings for travelers
    - Account login and agency registration / password reset
    - Agency tour submission and management
    - Admin approval of pending tours
    """

    def __init__(self, config: BackendConfig):
        """
        Initialize the backend service

        Args:
            config: BackendConfig with base URL and optional bearer token
        """
        self.config = config
        self.base_url = config.base_url.rstrip('/')
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        """
        Create a requests session with retry logic

        Only idempotent methods are retried, so a like toggle or booking
        is never submitted twice.
        """
        session = requests.Session()

        retry_strategy = Retry(
            total=self.config.max_retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "DELETE"],
            raise_on_status=False
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        return session

    def _get_headers(self, authenticated: bool = False) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        elif authenticated:
            raise AuthenticationError("Please login to continue", status_code=401)
        return headers

    def _request(
        self,
        method: str,
        path: str,
        authenticated: bool = False,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Send a request to the backend and return the decoded body

        Raises:
            BackendUnavailableError: On connection errors and timeouts
            BackendAPIError subclasses: On non-2xx responses
        """
        url = f"{self.base_url}{path}"
        headers = self._get_headers(authenticated)

        try:
            logger.debug(f"{method} {url}")
            response = self._session.request(
                method,
                url,
                headers=headers,
                json=json,
                params=params,
                timeout=self.config.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Backend request failed: {method} {path}: {str(e)}")
            raise BackendUnavailableError(
                "The tour service is currently unreachable. Please try again later."
            )

        return self._handle_response(response)

    def _handle_response(self, response: requests.Response) -> Any:
        """
        Handle API response and raise appropriate exceptions

        Args:
            response: requests.Response object

        Returns:
            Parsed JSON body (empty dict for empty bodies)
        """
        try:
            response_data = response.json() if response.text else {}
        except ValueError:
            response_data = {}

        status = response.status_code
        if 200 <= status < 300:
            return response_data

        error_msg = self._extract_error_message(response_data)
        if status in (400, 422):
            logger.warning(f"Validation error: {error_msg}")
            raise ValidationError(error_msg or "Invalid request", status, response_data)
        elif status == 401:
            logger.warning("Backend rejected credentials")
            raise AuthenticationError(error_msg or "Authentication required", status, response_data)
        elif status == 403:
            logger.warning(f"Permission denied: {error_msg}")
            raise PermissionDeniedError(error_msg or "Permission denied", status, response_data)
        elif status == 404:
            raise NotFoundError(error_msg or "Resource not found", status, response_data)
        elif status == 429:
            logger.warning("Rate limit exceeded")
            raise RateLimitError("Rate limit exceeded", status, response_data)
        else:
            error_msg = error_msg or f"Request failed with status {status}"
            logger.error(f"Backend error: {error_msg}")
            raise BackendAPIError(error_msg, status, response_data)

    def _extract_error_message(self, response_data: Any) -> str:
        """Pull a human-readable message out of an error body"""
        if not isinstance(response_data, dict):
            return ""
        if response_data.get("message"):
            return str(response_data["message"])
        errors = response_data.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, dict):
                return str(first.get("msg") or first.get("message") or "")
            return str(first)
        return str(response_data.get("error", ""))

    def _parse(self, parser, payload: Any, what: str):
        try:
            return parser(payload)
        except PayloadError as e:
            logger.error(f"Malformed {what} payload: {e.message}")
            raise MalformedResponseError(f"Malformed {what} data received", response={'field': e.field})

    # ==================== CATALOGUE ====================

    def get_approved_tours(self) -> List[Tour]:
        """
        Fetch all tours approved for public listing

        Malformed tours and packages are skipped; the rest of the catalogue
        is still returned.
        """
        payload = self._request("GET", "/tours/approved")
        tours = self._parse(lambda data: parse_tours(data, strict=False), payload, "tour")
        logger.info(f"Fetched {len(tours)} approved tour(s)")
        return tours

    def get_package_stats(self, tour_id: str, package_id: str) -> PackageStats:
        payload = self._request("GET", f"/reviews/package-stats/{tour_id}/{package_id}")
        return self._parse(PackageStats.from_dict, payload, "package stats")

    def get_total_likes(self, tour_id: str, package_id: str) -> Any:
        """Raw like total; callers clamp it for display"""
        payload = self._request("GET", f"/likes/totalLikes/{tour_id}/{package_id}")
        if not isinstance(payload, dict):
            raise MalformedResponseError("Malformed like total received")
        return payload.get("totalLikes", 0)

    def get_like_status(self, tour_id: str, package_id: str) -> bool:
        payload = self._request("GET", f"/likes/status/{tour_id}/{package_id}", authenticated=True)
        return bool(payload.get("liked")) if isinstance(payload, dict) else False

    # ==================== TRAVELER ACTIONS ====================

    def toggle_like(self, tour_id: str, package_id: str, user_id: str) -> bool:
        """
        Like or unlike a package

        Returns:
            True when the package is now liked
        """
        payload = self._request(
            "POST", "/likes/like", authenticated=True,
            json={"tourId": tour_id, "packageId": package_id, "userId": user_id}
        )
        if not isinstance(payload, dict) or "liked" not in payload:
            raise MalformedResponseError("Malformed like response received")
        return bool(payload["liked"])

    def get_package_reviews(self, tour_id: str, package_id: str) -> List[Review]:
        payload = self._request("GET", f"/reviews/{tour_id}/{package_id}")
        if isinstance(payload, dict):
            payload = payload.get("reviews", [])
        if not isinstance(payload, list):
            raise MalformedResponseError("Malformed review list received")
        return self._parse(lambda items: [Review.from_dict(item) for item in items], payload, "review")

    def submit_review(
        self,
        tour_id: str,
        package_id: str,
        rating: int,
        review: str,
        user: UserProfile
    ) -> Dict[str, Any]:
        """
        Submit a review

        Whether the traveler has booked the package is decided by the
        backend; a refusal surfaces as PermissionDeniedError.
        """
        return self._request(
            "POST", "/reviews", authenticated=True,
            json={
                "tourId": tour_id,
                "packageId": package_id,
                "rating": rating,
                "review": review,
                "userId": user.id,
                "userName": user.name
            }
        )

    def create_booking(self, booking: BookingRequest) -> Dict[str, Any]:
        logger.info(f"Creating booking for package {booking.package_id} on {booking.start_date}")
        return self._request("POST", "/bookings", authenticated=True, json=booking.to_payload())

    # ==================== ACCOUNTS ====================

    def _login(self, path: str, email: str, password: str, role: UserRole):
        payload = self._request("POST", path, json={"email": email, "password": password})
        if not isinstance(payload, dict) or not payload.get("token"):
            raise MalformedResponseError("Login response did not include a token")
        user = self._parse(lambda data: UserProfile.from_dict(data, role=role), payload, "user")
        return payload["token"], user

    def login(self, email: str, password: str):
        """Traveler login; returns (token, UserProfile)"""
        return self._login("/auth/login", email, password, UserRole.USER)

    def admin_login(self, email: str, password: str):
        return self._login("/auth/admin/login", email, password, UserRole.ADMIN)

    def agency_login(self, email: str, password: str):
        return self._login("/auth/agency/login", email, password, UserRole.AGENCY)

    def register_agency(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/auth/agency/register", json=data)

    def verify_agency_email(self, email: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/agency/verify-email", json={"email": email})

    def update_agency_password(self, email: str, password: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/auth/agency/update-password",
            json={"email": email, "password": password}
        )

    def get_user_stats(self, user_id: str) -> DashboardStats:
        payload = self._request("GET", f"/users/stats/{user_id}", authenticated=True)
        return self._parse(DashboardStats.from_dict, payload, "dashboard")

    # ==================== AGENCY ====================

    def get_agency_tours(self) -> List[Tour]:
        payload = self._request("GET", "/tours/agency", authenticated=True)
        if not isinstance(payload, dict) or not isinstance(payload.get("tours"), list):
            raise MalformedResponseError("Invalid data format received")
        return self._parse(parse_tours, payload["tours"], "tour")

    def create_tour(self, packages: List[TourPackage]) -> Dict[str, Any]:
        """Submit packages for approval; every package starts out pending"""
        body = []
        for pkg in packages:
            data = pkg.to_dict()
            data.pop("_id", None)
            data.pop("rating", None)
            data.pop("reviewCount", None)
            data["status"] = ApprovalStatus.PENDING.value
            body.append(data)
        logger.info(f"Submitting {len(body)} package(s) for approval")
        return self._request("POST", "/tours/create", authenticated=True, json={"packages": body})

    def delete_tour(self, tour_id: str) -> None:
        self._request("DELETE", f"/tours/{tour_id}", authenticated=True)

    # ==================== ADMIN ====================

    def get_pending_tours(self) -> List[Tour]:
        payload = self._request("GET", "/tours/pending", authenticated=True)
        return self._parse(parse_tours, payload, "tour")

    def update_tour_status(self, tour_id: str, status: ApprovalStatus) -> Dict[str, Any]:
        logger.info(f"Setting tour {tour_id} status to {status.value}")
        return self._request(
            "PATCH", f"/tours/{tour_id}/status", authenticated=True,
            json={"status": status.value}
        )

    # ==================== EMERGENCY ====================

    def send_emergency_alert(self, username: str, tour_package: str) -> Dict[str, Any]:
        logger.info(f"Emergency alert raised for '{tour_package}'")
        return self._request(
            "POST", "/emergency/alert", authenticated=True,
            json={"username": username, "tourPackage": tour_package}
        )


def create_backend_service(
    token: Optional[str] = None,
    base_url: Optional[str] = None
) -> TourBackendService:
    """
    Factory function to create a TourBackendService instance

    Args:
        token: Bearer token of the signed-in account, if any
        base_url: Backend URL (or BACKEND_API_URL from app config / environment)

    Returns:
        Configured TourBackendService instance
    """
    if has_app_context():
        settings = current_app.config
    else:
        settings = os.environ

    config = BackendConfig(
        base_url=base_url or settings.get("BACKEND_API_URL") or DEFAULT_BACKEND_URL,
        token=token,
        timeout=int(settings.get("BACKEND_TIMEOUT", 15)),
        max_retries=int(settings.get("BACKEND_MAX_RETRIES", 3))
    )

    return TourBackendService(config)
