# File: src/parkingctl/application/parking_service.py
"""
Parking Registry Application Service

This module implements the application service layer. Each public method is
one command use case: it parses positional string arguments into a request
DTO, drives the ParkingRegistry aggregate, and reports the outcome as an
OperationResult.

Error handling contract:
- Domain errors are caught here and turned into fixed messages
- Conflict, not-found and rejection errors keep their specific message
- Validation errors (bad numbers, booleans, kinds, prices, plates) collapse
  into the operation's generic failure message
- Nothing raises out of a use case, so one bad command never ends a session
"""

from typing import Callable, Optional, Sequence
import logging

from ..domain.aggregates import ParkingRegistry
from ..domain.exceptions import ErrorKind, ParkingError, ValidationError
from ..domain.models import ParkingSpot, SpotKind, format_money
from .dtos import (
    CreateParkingSpotDTO, ParkVehicleDTO, FreeParkingSpotDTO,
    GetParkingSpotDTO, ParkingIntervalsQueryDTO, OperationResult
)


class ParkingService:
    """
    Application service exposing the registry's command operations

    The registry is injected so that callers (and tests) own its lifetime.
    """

    def __init__(self, registry: Optional[ParkingRegistry] = None):
        self.registry = registry if registry is not None else ParkingRegistry()
        self.logger = logging.getLogger(self.__class__.__name__)

    # ========================================================================
    # COMMAND OPERATIONS
    # ========================================================================

    def create_parking_spot(self, args: Sequence[str]) -> OperationResult:
        def operation() -> str:
            request = CreateParkingSpotDTO.from_args(args)

            bound_plate = None
            if request.is_subscription:
                if request.bound_plate is None:
                    raise ValidationError("Subscription spots need a registration plate")
                bound_plate = request.bound_plate

            self.registry.ensure_unregistered(request.spot_id)

            spot = ParkingSpot(
                request.spot_id,
                request.occupied,
                SpotKind.parse(request.kind),
                request.price_per_hour,
                bound_plate
            )
            self.registry.register(spot)
            return f"Parking spot {spot.id} was successfully registered in the system!"

        return self._execute("CreateParkingSpot", operation, "Unable to create parking spot!")

    def park_vehicle(self, args: Sequence[str]) -> OperationResult:
        def operation() -> str:
            request = ParkVehicleDTO.from_args(args)
            self.registry.park_vehicle(
                request.spot_id,
                request.registration_plate,
                request.hours_parked,
                request.kind
            )
            return (
                f"Vehicle {request.registration_plate} parked at {request.spot_id} "
                f"for {request.hours_parked} hours."
            )

        return self._execute("ParkVehicle", operation, "Unable to park vehicle!")

    def free_parking_spot(self, args: Sequence[str]) -> OperationResult:
        def operation() -> str:
            request = FreeParkingSpotDTO.from_args(args)
            self.registry.free_spot(request.spot_id)
            return f"Parking spot {request.spot_id} is now free!"

        return self._execute("FreeParkingSpot", operation, "Unable to free parking spot!")

    def get_parking_spot_by_id(self, args: Sequence[str]) -> OperationResult:
        def operation() -> str:
            request = GetParkingSpotDTO.from_args(args)
            return self.registry.get(request.spot_id).describe()

        return self._execute("GetParkingSpotById", operation, "Unable to get parking spot by id!")

    def get_parking_intervals_by_plate(self, args: Sequence[str]) -> OperationResult:
        def operation() -> str:
            request = ParkingIntervalsQueryDTO.from_args(args)
            intervals = self.registry.intervals_for(request.spot_id, request.registration_plate)

            if not intervals:
                return (
                    f"No parking intervals found for vehicle with registration plate "
                    f"{request.registration_plate} on parking spot {request.spot_id}."
                )
            return "\n".join(str(interval) for interval in intervals)

        return self._execute(
            "GetParkingIntervalsByPlate",
            operation,
            "Unable to get parking intervals by parking spot id and registration plate!"
        )

    def calculate_total(self, args: Sequence[str] = ()) -> OperationResult:
        def operation() -> str:
            total = self.registry.total_revenue()
            return f"Total revenue from the parking: {format_money(total)}"

        return self._execute("CalculateTotal", operation, "Unable to calculate total revenue!")

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _execute(self, name: str, operation: Callable[[], str], failure_message: str) -> OperationResult:
        """Run a use case and convert any error into a result"""
        try:
            message = operation()
        except ValidationError as e:
            self.logger.warning(f"{name} rejected invalid input: {e.message}")
            return OperationResult.failed(failure_message, ErrorKind.VALIDATION)
        except ParkingError as e:
            self.logger.warning(f"{name} failed: {e.message}")
            return OperationResult.failed(e.message, e.kind)
        except Exception as e:
            self.logger.error(f"Unexpected error in {name}: {e}", exc_info=True)
            return OperationResult.failed(failure_message)

        self.logger.debug(f"{name} succeeded")
        return OperationResult.ok(message)
