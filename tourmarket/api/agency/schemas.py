"""
Agency API Validation Schemas
"""
import math
from typing import Dict, Any, Tuple, List

from tourmarket.models import TourPackage
from tourmarket.utils.validation import Validator

MAX_PACKAGES_PER_TOUR = 20


class AgencySchemas:
    """Validation schemas for agency endpoints"""

    @staticmethod
    def validate_tour_submission(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], List[TourPackage]]:
        """
        Validate a tour submission

        Request Body:
            {"packages": [{packageName, tourLocation, packageDescription,
                           duration, maxGroupSize, price, image}, ...]}

        Returns:
            (is_valid, errors, packages) with errors keyed as
            ``packages[<index>].<field>``
        """
        errors = {}
        packages = []
        data = data or {}

        raw_packages = data.get('packages')
        if not isinstance(raw_packages, list) or not raw_packages:
            return False, {'packages': 'At least one tour package is required'}, []
        if len(raw_packages) > MAX_PACKAGES_PER_TOUR:
            return False, {'packages': f'A tour may hold at most {MAX_PACKAGES_PER_TOUR} packages'}, []

        for index, raw in enumerate(raw_packages):
            package_errors, package = AgencySchemas._validate_package(raw if isinstance(raw, dict) else {})
            for field, message in package_errors.items():
                errors[f'packages[{index}].{field}'] = message
            if package:
                packages.append(package)

        return len(errors) == 0, errors, packages

    @staticmethod
    def _validate_package(data: Dict[str, Any]):
        errors = {}

        name = Validator.sanitize_input(data.get('packageName', ''), 200)
        if not name:
            errors['packageName'] = 'Package name is required'

        location = Validator.sanitize_input(data.get('tourLocation', ''), 200)
        if not location:
            errors['tourLocation'] = 'Tour location is required'

        description = Validator.sanitize_input(data.get('packageDescription', ''), 5000)
        if not description:
            errors['packageDescription'] = 'Package description is required'

        duration = AgencySchemas._whole_number(data.get('duration'))
        if duration is None or duration < 1:
            errors['duration'] = 'Duration must be at least 1 day'

        group_size = AgencySchemas._whole_number(data.get('maxGroupSize'))
        if group_size is None or group_size < 1:
            errors['maxGroupSize'] = 'Group size must be at least 1 person'

        try:
            price = float(data.get('price'))
            if not math.isfinite(price) or price < 0:
                errors['price'] = 'Price cannot be negative'
        except (TypeError, ValueError):
            price = None
            errors['price'] = 'Invalid price'

        image = data.get('image') or ''
        if image:
            image_ok, image_message = Validator.validate_image_reference(str(image))
            if not image_ok:
                errors['image'] = image_message

        if errors:
            return errors, None

        return errors, TourPackage(
            id='',
            package_name=name,
            package_description=description,
            tour_location=location,
            duration=duration,
            max_group_size=group_size,
            price=price,
            image=str(image)
        )

    @staticmethod
    def _whole_number(value):
        if isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number) or number != int(number):
            return None
        return int(number)
