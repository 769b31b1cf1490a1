"""
Traveler action validation schemas
"""
import math
from datetime import date
from typing import Dict, Any, Tuple

from tourmarket.utils.validation import Validator

MAX_REVIEW_LENGTH = 2000


class TourSchemas:
    """Validation schemas for review and booking requests"""

    @staticmethod
    def validate_review(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """
        Validate a review submission

        Returns:
            (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        rating = data.get('rating')
        try:
            rating = int(rating)
            if isinstance(data.get('rating'), bool) or rating != float(data.get('rating')):
                raise ValueError
        except (TypeError, ValueError):
            rating = None

        if rating is None or rating == 0:
            errors['rating'] = 'Please select a rating before submitting'
        elif not 1 <= rating <= 5:
            errors['rating'] = 'Rating must be between 1 and 5'
        else:
            cleaned_data['rating'] = rating

        review = Validator.sanitize_input(data.get('review', ''), MAX_REVIEW_LENGTH)
        if not review:
            errors['review'] = 'Review text is required'
        else:
            cleaned_data['review'] = review

        return len(errors) == 0, errors, cleaned_data

    @staticmethod
    def validate_booking(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """
        Validate a booking request

        Request Body:
            startDate: YYYY-MM-DD, today or later
            price: Amount charged, non-negative
            paymentReference: Reference of the captured payment (optional)
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        start_date = Validator.parse_date(data.get('startDate'))
        if start_date is None:
            errors['startDate'] = 'Start date is required (YYYY-MM-DD)'
        elif start_date < date.today():
            errors['startDate'] = 'Start date cannot be in the past'
        else:
            cleaned_data['start_date'] = start_date

        try:
            price = float(data.get('price'))
            if not math.isfinite(price):
                errors['price'] = 'Invalid price'
            elif price < 0:
                errors['price'] = 'Price cannot be negative'
            else:
                cleaned_data['price'] = price
        except (TypeError, ValueError):
            errors['price'] = 'Invalid price'

        reference = Validator.sanitize_input(data.get('paymentReference', ''), 128)
        cleaned_data['payment_reference'] = reference or None

        return len(errors) == 0, errors, cleaned_data
