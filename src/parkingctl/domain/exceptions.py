# File: src/parkingctl/domain/exceptions.py
"""
Domain Errors for the Parking Registry

Every failure the domain layer can report belongs to one of four kinds:

1. ValidationError - bad argument value (price, hours, plate, kind, ...)
2. ConflictError   - a spot with the same id is already registered
3. NotFoundError   - no spot with the requested id
4. RejectionError  - admission refused, or spot already in the requested state

The application layer converts these into result messages; they never
reach the command loop.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Kinds of failure an operation can report"""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    REJECTION = "rejection"


class ParkingError(Exception):
    """Base class for all parking registry errors"""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str, spot_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.spot_id = spot_id


class ValidationError(ParkingError, ValueError):
    """Raised when a value violates a domain invariant"""
    kind = ErrorKind.VALIDATION


class ConflictError(ParkingError):
    """Raised when registering a spot id that already exists"""
    kind = ErrorKind.CONFLICT


class NotFoundError(ParkingError, LookupError):
    """Raised when a spot id is not registered"""
    kind = ErrorKind.NOT_FOUND


class RejectionError(ParkingError):
    """Raised when a vehicle is refused or a spot is already free"""
    kind = ErrorKind.REJECTION
