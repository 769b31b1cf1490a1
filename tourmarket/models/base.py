"""
Boundary helpers for turning backend JSON into typed records.

Backend payloads are loosely shaped (Mongo style ``_id`` keys, numbers sent as
strings, optional fields that may be missing or null). Every record goes
through these helpers once, in its ``from_dict``, so the rest of the front end
only ever sees validated values.
"""
import math
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

E = TypeVar('E', bound=Enum)


class PayloadError(ValueError):
    """Raised when a backend payload does not have the expected shape"""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


def ensure_mapping(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise PayloadError(f"{what} must be an object, got {type(data).__name__}")
    return data


def record_id(data: Dict[str, Any], required: bool = True) -> str:
    """Read an identifier from either ``_id`` or ``id``"""
    value = data.get('_id', data.get('id'))
    if value is None or str(value).strip() == '':
        if required:
            raise PayloadError("Missing identifier", field='_id')
        return ''
    return str(value)


def require_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None or not str(value).strip():
        raise PayloadError(f"'{key}' is required", field=key)
    return str(value).strip()


def optional_str(data: Dict[str, Any], key: str, default: str = '') -> str:
    value = data.get(key)
    if value is None:
        return default
    return str(value)


def as_int(data: Dict[str, Any], key: str, minimum: int = 0, default: Optional[int] = None) -> int:
    value = data.get(key)
    if value is None:
        if default is not None:
            return default
        raise PayloadError(f"'{key}' is required", field=key)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise PayloadError(f"'{key}' must be a whole number", field=key)
    if not math.isfinite(number) or number != int(number):
        raise PayloadError(f"'{key}' must be a whole number", field=key)
    if number < minimum:
        raise PayloadError(f"'{key}' must be at least {minimum}", field=key)
    return int(number)


def as_float(data: Dict[str, Any], key: str, minimum: float = 0.0, default: Optional[float] = None) -> float:
    value = data.get(key)
    if value is None:
        if default is not None:
            return default
        raise PayloadError(f"'{key}' is required", field=key)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise PayloadError(f"'{key}' must be a number", field=key)
    if not math.isfinite(number):
        raise PayloadError(f"'{key}' must be a finite number", field=key)
    if number < minimum:
        raise PayloadError(f"'{key}' must be at least {minimum}", field=key)
    return number


def optional_float(data: Dict[str, Any], key: str) -> Optional[float]:
    if data.get(key) is None:
        return None
    return as_float(data, key)


def optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    if data.get(key) is None:
        return None
    return as_int(data, key)


def as_enum(enum_cls: Type[E], value: Any, field: str) -> E:
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise PayloadError(f"'{field}' must be one of: {allowed}", field=field)


def parse_enum(enum_cls: Type[E], value: Any) -> Optional[E]:
    """Lenient lookup: unknown or empty values give None"""
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return None
