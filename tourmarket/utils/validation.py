import re
from datetime import date, datetime
from typing import Optional, Tuple

# Agency image uploads travel inline as data URIs
MAX_IMAGE_BYTES = 5 * 1024 * 1024


class Validator:
    """Input validation helpers"""

    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format"""
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return re.match(pattern, email) is not None

    @staticmethod
    def validate_phone(phone: str) -> bool:
        """Validate phone number format"""
        # Remove common formatting characters
        cleaned = re.sub(r'[\s\-\(\)\+]', '', phone)
        # Check if it's 10-15 digits
        return cleaned.isdigit() and 10 <= len(cleaned) <= 15

    @staticmethod
    def validate_image_reference(image: str) -> Tuple[bool, str]:
        """Accept http(s) URLs, site-relative paths and base64 image data URIs"""
        if image.startswith(('http://', 'https://', '/')):
            return True, "Valid image URL"

        match = re.match(r'^data:image/[a-zA-Z0-9.+-]+;base64,(.*)$', image, re.DOTALL)
        if not match:
            return False, "Image must be a URL or an image data URI"

        # base64 encodes 3 bytes in 4 characters
        encoded = match.group(1)
        size = len(encoded) * 3 // 4 - encoded.count('=')
        if size > MAX_IMAGE_BYTES:
            return False, "Image size should be less than 5MB"
        return True, "Valid image data"

    @staticmethod
    def parse_date(value: str) -> Optional[date]:
        """Parse YYYY-MM-DD (or a full ISO timestamp) into a date"""
        try:
            return datetime.strptime(value[:10], '%Y-%m-%d').date()
        except (TypeError, ValueError):
            return None

    @staticmethod
    def sanitize_input(text: str, max_length: int = None) -> str:
        """Sanitize user input"""
        if not text:
            return ""

        # Remove leading/trailing whitespace
        text = str(text).strip()

        # Truncate if needed
        if max_length and len(text) > max_length:
            text = text[:max_length]

        return text
