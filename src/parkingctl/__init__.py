"""
parkingctl - in-memory parking spot registry driven by text commands
"""

from .application.commands import CommandDispatcher, CommandLine
from .application.dtos import OperationResult
from .application.parking_service import ParkingService
from .domain.aggregates import ParkingRegistry
from .domain.exceptions import (
    ErrorKind, ParkingError, ValidationError,
    ConflictError, NotFoundError, RejectionError
)
from .domain.models import ParkingInterval, ParkingSpot, SpotKind

__version__ = "1.0.0"

__all__ = [
    "CommandDispatcher", "CommandLine", "OperationResult", "ParkingService",
    "ParkingRegistry", "ErrorKind", "ParkingError", "ValidationError",
    "ConflictError", "NotFoundError", "RejectionError",
    "ParkingInterval", "ParkingSpot", "SpotKind",
]
