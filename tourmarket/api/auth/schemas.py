"""
Authentication validation schemas
Validates login, agency registration and agency password reset requests
before they are forwarded to the backend
"""
import re
from typing import Optional, Dict, Any, Tuple

from tourmarket.utils.validation import Validator


class AuthSchemas:
    """Validation schemas for authentication endpoints"""

    @staticmethod
    def validate_login(data: Optional[Dict[str, Any]]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """
        Validate login data

        Returns:
            Tuple of (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        email = str(data.get('email') or '').strip().lower()
        if not email:
            errors['email'] = 'Email is required'
        elif not Validator.validate_email(email):
            errors['email'] = 'Invalid email format'
        else:
            cleaned_data['email'] = email

        password = data.get('password') or ''
        if not password:
            errors['password'] = 'Password is required'
        else:
            cleaned_data['password'] = password

        return len(errors) == 0, errors, cleaned_data

    @staticmethod
    def validate_agency_registration(data: Optional[Dict[str, Any]]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """
        Validate agency registration data

        Args:
            data: agencyName, ownerName, email, phone, password, confirmPassword

        Returns:
            Tuple of (is_valid, errors, cleaned_data) where cleaned_data is
            the body forwarded to the backend
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        agency_name = Validator.sanitize_input(data.get('agencyName', ''), 120)
        if not agency_name:
            errors['agencyName'] = 'Agency name is required'
        elif len(agency_name) < 2:
            errors['agencyName'] = 'Agency name must be at least 2 characters'
        else:
            cleaned_data['agencyName'] = agency_name

        owner_name = Validator.sanitize_input(data.get('ownerName', ''), 120)
        if not owner_name:
            errors['ownerName'] = 'Owner name is required'
        else:
            cleaned_data['ownerName'] = owner_name

        email = str(data.get('email') or '').strip().lower()
        if not email:
            errors['email'] = 'Email is required'
        elif not Validator.validate_email(email):
            errors['email'] = 'Invalid email format'
        else:
            cleaned_data['email'] = email

        phone = str(data.get('phone') or '').strip()
        if not phone:
            errors['phone'] = 'Phone number is required'
        elif not Validator.validate_phone(phone):
            errors['phone'] = 'Invalid phone number format'
        else:
            cleaned_data['phone'] = phone

        password_errors = AuthSchemas._check_new_password(data)
        errors.update(password_errors)
        if not password_errors:
            cleaned_data['password'] = data['password']

        return len(errors) == 0, errors, cleaned_data

    @staticmethod
    def validate_password_reset(data: Optional[Dict[str, Any]]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """Validate the new password for a verified agency email"""
        errors = {}
        cleaned_data = {}
        data = data or {}

        email = str(data.get('email') or '').strip().lower()
        if not email:
            errors['email'] = 'Please enter your agency email address'
        elif not Validator.validate_email(email):
            errors['email'] = 'Invalid email format'
        else:
            cleaned_data['email'] = email

        password_errors = AuthSchemas._check_new_password(data)
        errors.update(password_errors)
        if not password_errors:
            cleaned_data['password'] = data['password']

        return len(errors) == 0, errors, cleaned_data

    @staticmethod
    def _check_new_password(data: Dict[str, Any]) -> Dict[str, str]:
        errors = {}
        password = data.get('password') or ''
        confirm_password = data.get('confirmPassword') or ''

        if not password:
            errors['password'] = 'Password is required'
        elif len(password) < 8:
            errors['password'] = 'Password must be at least 8 characters'
        elif not AuthSchemas._validate_password_strength(password):
            errors['password'] = 'Password must contain at least one letter and one number'

        if not confirm_password:
            errors['confirmPassword'] = 'Password confirmation is required'
        elif password != confirm_password:
            errors['confirmPassword'] = 'Passwords do not match'

        return errors

    @staticmethod
    def _validate_password_strength(password: str) -> bool:
        """At least one letter and one digit"""
        return bool(re.search(r'[A-Za-z]', password)) and bool(re.search(r'\d', password))
