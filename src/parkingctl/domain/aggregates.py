# File: src/parkingctl/domain/aggregates.py
"""
Aggregate Root for the Parking Registry

ParkingRegistry owns every ParkingSpot and is the only place where
occupancy is committed. Spots are keyed by id in insertion order, so
lookups are O(1) and iteration follows registration order.

Business methods raise domain errors from .exceptions; converting them
into user-facing messages is the application layer's job.
"""

from decimal import Decimal
from typing import Dict, Iterator, List, Optional
import logging

from .exceptions import ConflictError, NotFoundError, RejectionError
from .models import ParkingInterval, ParkingSpot, money_context


class ParkingRegistry:
    """
    Aggregate Root: all registered parking spots
    Enforces unique spot ids
    """

    def __init__(self, spots: Optional[List[ParkingSpot]] = None):
        self._spots: Dict[int, ParkingSpot] = {}  # spot_id -> ParkingSpot
        self._logger = logging.getLogger(self.__class__.__name__)

        for spot in spots or []:
            self.register(spot)

    # ========================================================================
    # QUERIES
    # ========================================================================

    def __len__(self) -> int:
        return len(self._spots)

    def __iter__(self) -> Iterator[ParkingSpot]:
        return iter(self._spots.values())

    def __contains__(self, spot_id: object) -> bool:
        return spot_id in self._spots

    def find(self, spot_id: int) -> Optional[ParkingSpot]:
        return self._spots.get(spot_id)

    def get(self, spot_id: int) -> ParkingSpot:
        """
        Get a spot by id
        Raises: NotFoundError if no such spot
        """
        spot = self.find(spot_id)
        if spot is None:
            raise NotFoundError(f"Parking spot {spot_id} not found!", spot_id)
        return spot

    def intervals_for(self, spot_id: int, registration_plate: str) -> List[ParkingInterval]:
        return self.get(spot_id).intervals_for_plate(registration_plate)

    def total_revenue(self) -> Decimal:
        with money_context():
            return sum((spot.total_revenue() for spot in self._spots.values()), Decimal("0"))

    # ========================================================================
    # BUSINESS METHODS
    # ========================================================================

    def ensure_unregistered(self, spot_id: int) -> None:
        """Raises: ConflictError if the id is already taken"""
        if spot_id in self._spots:
            raise ConflictError(f"Parking spot {spot_id} is already registered!", spot_id)

    def register(self, spot: ParkingSpot) -> ParkingSpot:
        """
        Add a spot to the registry
        Raises: ConflictError if a spot with the same id exists
        """
        self.ensure_unregistered(spot.id)
        self._spots[spot.id] = spot
        self._logger.info(f"Registered {spot!r}")
        return spot

    def park_vehicle(
        self,
        spot_id: int,
        registration_plate: str,
        hours_parked: int,
        requested_kind: str
    ) -> ParkingInterval:
        """
        Park a vehicle and mark the spot occupied
        Returns: the recorded interval
        Raises: NotFoundError, RejectionError, ValidationError
        """
        spot = self.get(spot_id)

        if not spot.park_vehicle(registration_plate, hours_parked, requested_kind):
            raise RejectionError(f"Vehicle {registration_plate} can't park at {spot_id}.", spot_id)

        spot.occupied = True
        self._logger.info(f"Vehicle {registration_plate} parked at spot {spot_id} for {hours_parked} hours")
        return spot.intervals[-1]

    def free_spot(self, spot_id: int) -> ParkingSpot:
        """
        Mark an occupied spot as free
        Raises: NotFoundError, RejectionError if the spot is not occupied
        """
        spot = self.get(spot_id)

        if not spot.occupied:
            raise RejectionError(f"Parking spot {spot_id} is not occupied.", spot_id)

        spot.occupied = False
        self._logger.info(f"Parking spot {spot_id} freed")
        return spot
