# File: src/parkingctl/domain/models.py
"""
Domain Models for the Parking Registry

This module contains:
1. SpotKind: enumeration of parking spot kinds
2. ParkingSpot: entity with identity, occupancy, price and parking history
3. ParkingInterval: one recorded parking event with derived revenue
4. Admission rules: which vehicles a given spot kind accepts

A spot is a tagged variant: every spot carries a kind, and only subscription
spots carry a bound registration plate. Kind-specific behaviour lives in
``admits`` rather than in subclasses.
"""

from decimal import (
    Context, Decimal, InvalidOperation, MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, localcontext
)
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union
import logging

from .exceptions import ValidationError

CURRENCY = "BGN"

_CENTS = Decimal("0.01")

# Money is only multiplied, added and quantized, so results stay exact
_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, rounding=ROUND_HALF_UP)

PriceLike = Union[Decimal, int, str]


def money_context():
    """Decimal context for money arithmetic, free of the 28 digit default"""
    return localcontext(_EXACT)


def format_money(amount: Decimal, currency: str = CURRENCY) -> str:
    """Format an amount with two decimal digits and the currency suffix"""
    with money_context():
        return f"{amount.quantize(_CENTS)} {currency}"


def _same_text(left: str, right: str) -> bool:
    return left.lower() == right.lower()


def _require_plate(value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError("Registration plate can't be null or empty!")
    return str(value)


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class SpotKind(Enum):
    """
    Enumeration of parking spot kinds
    Each kind has its own admission rule
    """
    CAR = "car"
    BUS = "bus"
    SUBSCRIPTION = "subscription"

    @classmethod
    def parse(cls, text: str) -> 'SpotKind':
        """Resolve a kind name case-insensitively"""
        try:
            return cls(str(text).lower())
        except ValueError:
            raise ValidationError(f"Unknown parking spot type: {text}") from None

    @property
    def is_paid(self) -> bool:
        """Subscription spots are prepaid and earn nothing per hour"""
        return self is not SpotKind.SUBSCRIPTION

    def __str__(self) -> str:
        return self.value


# ============================================================================
# DOMAIN ENTITIES
# ============================================================================

class ParkingInterval:
    """
    Entity: One parking event recorded on a spot

    Revenue is derived on every read from the owning spot's current price,
    so a later price change is reflected in historical revenue.
    """

    def __init__(self, parking_spot: 'ParkingSpot', registration_plate: str, hours_parked: int):
        if isinstance(hours_parked, bool) or not isinstance(hours_parked, int):
            raise ValidationError(f"Hours parked must be a whole number, got: {hours_parked!r}")
        if hours_parked <= 0:
            raise ValidationError("Hours parked can't be zero or negative!")

        self._parking_spot = parking_spot
        self._registration_plate = _require_plate(registration_plate)
        self._hours_parked = hours_parked

    @property
    def parking_spot(self) -> 'ParkingSpot':
        return self._parking_spot

    @property
    def registration_plate(self) -> str:
        return self._registration_plate

    @property
    def hours_parked(self) -> int:
        return self._hours_parked

    @property
    def revenue(self) -> Decimal:
        """Price of the owning spot times hours parked, zero for subscriptions"""
        if not self._parking_spot.kind.is_paid:
            return Decimal("0")
        with money_context():
            return self._parking_spot.price_per_hour * self._hours_parked

    def matches_plate(self, registration_plate: str) -> bool:
        return _same_text(self._registration_plate, registration_plate)

    def __str__(self) -> str:
        return (
            f"Parking Spot #{self._parking_spot.id}\n"
            f"RegistrationPlate: {self._registration_plate}\n"
            f"HoursParked: {self._hours_parked}\n"
            f"Revenue: {format_money(self.revenue)}"
        )

    def __repr__(self) -> str:
        return (
            f"ParkingInterval(spot={self._parking_spot.id}, "
            f"plate={self._registration_plate!r}, hours={self._hours_parked})"
        )


class ParkingSpot:
    """
    Entity: A registered parking location

    Identity is the integer id. Kind and bound plate are fixed at
    construction; price can be changed through the validated setter;
    the interval history only grows.
    """

    def __init__(
        self,
        id: int,
        occupied: bool,
        kind: SpotKind,
        price_per_hour: PriceLike,
        bound_plate: Optional[str] = None
    ):
        if not isinstance(kind, SpotKind):
            kind = SpotKind.parse(kind)

        if kind is SpotKind.SUBSCRIPTION:
            bound_plate = _require_plate(bound_plate)
        elif bound_plate is not None:
            raise ValidationError(f"Only subscription spots can be bound to a plate, not {kind} spots")

        self._id = id
        self._kind = kind
        self._bound_plate = bound_plate
        self.occupied = bool(occupied)
        self.price_per_hour = price_per_hour
        self._intervals: List[ParkingInterval] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    # Named constructors, one per kind

    @classmethod
    def car(cls, id: int, occupied: bool, price_per_hour: PriceLike) -> 'ParkingSpot':
        return cls(id, occupied, SpotKind.CAR, price_per_hour)

    @classmethod
    def bus(cls, id: int, occupied: bool, price_per_hour: PriceLike) -> 'ParkingSpot':
        return cls(id, occupied, SpotKind.BUS, price_per_hour)

    @classmethod
    def subscription(
        cls,
        id: int,
        occupied: bool,
        price_per_hour: PriceLike,
        bound_plate: str
    ) -> 'ParkingSpot':
        return cls(id, occupied, SpotKind.SUBSCRIPTION, price_per_hour, bound_plate)

    @property
    def id(self) -> int:
        return self._id

    @property
    def kind(self) -> SpotKind:
        return self._kind

    @property
    def bound_plate(self) -> Optional[str]:
        """Plate allowed to use a subscription spot, None for other kinds"""
        return self._bound_plate

    @property
    def price_per_hour(self) -> Decimal:
        return self._price_per_hour

    @price_per_hour.setter
    def price_per_hour(self, value: PriceLike) -> None:
        if isinstance(value, float):
            value = str(value)
        try:
            price = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError(f"Invalid parking price: {value!r}") from None

        if not price.is_finite() or price <= 0:
            raise ValidationError("Parking price cannot be less or equal to 0!")
        self._price_per_hour = price

    @property
    def intervals(self) -> Tuple[ParkingInterval, ...]:
        return tuple(self._intervals)

    def park_vehicle(self, registration_plate: str, hours_parked: int, requested_kind: str) -> bool:
        """
        Record a parking interval if the spot is free and admits the vehicle.

        Occupancy is not changed here; the registry marks the spot occupied
        once this returns True.
        Raises: ValidationError if the plate or hours are invalid
        """
        if self.occupied or not admits(self, registration_plate, requested_kind):
            return False

        interval = ParkingInterval(self, registration_plate, hours_parked)
        self._intervals.append(interval)
        self._logger.debug(f"Recorded {interval!r}")
        return True

    def intervals_for_plate(self, registration_plate: str) -> List[ParkingInterval]:
        """All recorded intervals for a plate, oldest first"""
        return [i for i in self._intervals if i.matches_plate(registration_plate)]

    def total_revenue(self) -> Decimal:
        with money_context():
            return sum((i.revenue for i in self._intervals), Decimal("0"))

    def describe(self) -> str:
        return (
            f"Parking Spot #{self._id}\n"
            f"Occupied: {self.occupied}\n"
            f"Type: {self._kind}\n"
            f"Price per hour: {format_money(self._price_per_hour)}"
        )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"ParkingSpot(id={self._id}, kind={self._kind.value}, occupied={self.occupied})"


# ============================================================================
# ADMISSION RULES
# ============================================================================

def _admits_by_kind(spot: ParkingSpot, registration_plate: str, requested_kind: str) -> bool:
    return _same_text(str(requested_kind), spot.kind.value)


def _admits_by_plate(spot: ParkingSpot, registration_plate: str, requested_kind: str) -> bool:
    # requested kind is irrelevant for subscription holders
    return _same_text(str(registration_plate), spot.bound_plate)


_ADMISSION_RULES: Dict[SpotKind, Callable[[ParkingSpot, str, str], bool]] = {
    SpotKind.CAR: _admits_by_kind,
    SpotKind.BUS: _admits_by_kind,
    SpotKind.SUBSCRIPTION: _admits_by_plate,
}


def admits(spot: ParkingSpot, registration_plate: str, requested_kind: str) -> bool:
    """
    Check whether a spot's kind accepts the vehicle.
    Occupancy is not considered here.
    """
    return _ADMISSION_RULES[spot.kind](spot, registration_plate, requested_kind)
